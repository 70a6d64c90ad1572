"""Unit tests for period-over-period trend composition."""

from __future__ import annotations

import pytest

from builders import atom, funnel_dataset, session, spend, transaction
from daily_brief.application.trend_service import (
    calculate_channels_trend,
    calculate_conversions_trend,
    calculate_metrics_trend,
    compare,
    is_change_significant,
)
from daily_brief.domain.models import MarketingDataset


def test_significance_from_zero_baseline() -> None:
    """Any growth from a zero baseline is significant even though the change reads as 0%."""
    trend = compare(5.0, 0.0)

    assert trend.percentage_change == 0.0
    assert trend.is_significant is True
    assert is_change_significant(0.0, 0.0) is False


def test_significance_threshold_is_inclusive() -> None:
    below = compare(109.0, 100.0)
    at = compare(110.0, 100.0)
    drop = compare(80.0, 100.0)

    assert below.percentage_change == pytest.approx(9.0)
    assert below.is_significant is False
    assert at.percentage_change == pytest.approx(10.0)
    assert at.is_significant is True
    assert drop.percentage_change == pytest.approx(-20.0)
    assert drop.is_significant is True


def test_custom_threshold_is_honoured() -> None:
    assert compare(104.0, 100.0, threshold=5.0).is_significant is False
    assert compare(105.0, 100.0, threshold=5.0).is_significant is True


def test_metrics_trend_compares_roas_and_cac() -> None:
    current = funnel_dataset()
    previous = MarketingDataset(transactions=(transaction("p1", 20.0, "2024-03-01"),), source_data=(spend(20.0, "2024-03-01"),))

    trends = calculate_metrics_trend(current, previous)

    assert trends["roas"].current == pytest.approx(2.5)
    assert trends["roas"].previous == pytest.approx(1.0)
    assert trends["roas"].percentage_change == pytest.approx(150.0)
    assert trends["roas"].is_significant is True
    assert trends["cac"].current == pytest.approx(20.0)
    assert trends["cac"].previous == pytest.approx(20.0)
    assert trends["cac"].is_significant is False
    assert trends["roas"].possible_reasons == []


def test_conversions_trend_lists_all_four_stages_in_order() -> None:
    stages = calculate_conversions_trend(funnel_dataset(), MarketingDataset())

    assert [stage.name for stage in stages] == [
        "Visitor to Lead",
        "Lead to Contact",
        "Contact to Customer",
        "Overall (Visitor to Customer)",
    ]
    assert all(stage.previous == 0.0 for stage in stages)
    assert all(stage.is_significant for stage in stages)


def test_channels_trend_defaults_missing_previous_channel() -> None:
    current = MarketingDataset(
        sessions=tuple(session(f"u{index}") for index in range(10)),
        atoms=(atom("a1", "Search"), atom("a2", "Social")),
    )
    previous = MarketingDataset(
        sessions=tuple(session(f"p{index}", "2024-03-01") for index in range(20)),
        atoms=(atom("a1", "Search"),),
    )

    channels = calculate_channels_trend(current, previous)

    search, social = channels
    assert search.name == "Search"
    assert search.current.sessions == 1
    assert search.current.percentage == pytest.approx(10.0)
    assert search.previous.percentage == pytest.approx(5.0)
    assert search.change == pytest.approx(100.0)
    assert social.previous.sessions == 0
    assert social.previous.percentage == 0.0
    assert social.is_significant is True
