"""Period-over-period trend composition for metrics, funnel stages and channels."""

from __future__ import annotations

from typing import Callable

from daily_brief.application.reporting.metrics import (
    FUNNEL_STAGE_NAMES,
    analyze_channel_distribution,
    calculate_cac,
    calculate_conversion_rates,
    calculate_roas,
    safe_pct_change,
)
from daily_brief.domain.models import MarketingDataset
from daily_brief.domain.results import ChannelShare, ChannelTrend, FunnelStage, MetricTrend, Trend

DEFAULT_SIGNIFICANT_CHANGE_THRESHOLD = 10.0

Calculator = Callable[[MarketingDataset], float]


def is_change_significant(current: float, previous: float, threshold: float = DEFAULT_SIGNIFICANT_CHANGE_THRESHOLD) -> bool:
    if previous == 0:
        return current > 0
    return abs(safe_pct_change(current, previous)) >= threshold


def compare(current: float, previous: float, threshold: float = DEFAULT_SIGNIFICANT_CHANGE_THRESHOLD) -> Trend:
    return Trend(
        current=current,
        previous=previous,
        percentage_change=safe_pct_change(current, previous),
        is_significant=is_change_significant(current, previous, threshold),
    )


def compose_trend(
    calculator: Calculator,
    current: MarketingDataset,
    previous: MarketingDataset,
    threshold: float = DEFAULT_SIGNIFICANT_CHANGE_THRESHOLD,
) -> Trend:
    return compare(calculator(current), calculator(previous), threshold)


def roas_of(dataset: MarketingDataset) -> float:
    return calculate_roas(dataset.transactions, dataset.source_data)


def cac_of(dataset: MarketingDataset) -> float:
    return calculate_cac(dataset.transactions, dataset.source_data)


def conversion_rates_of(dataset: MarketingDataset) -> dict[str, float]:
    return calculate_conversion_rates(dataset.sessions, dataset.leads, dataset.contacts, dataset.transactions)


def calculate_metrics_trend(
    current: MarketingDataset,
    previous: MarketingDataset,
    threshold: float = DEFAULT_SIGNIFICANT_CHANGE_THRESHOLD,
) -> dict[str, MetricTrend]:
    return {
        "roas": MetricTrend.from_trend(compose_trend(roas_of, current, previous, threshold)),
        "cac": MetricTrend.from_trend(compose_trend(cac_of, current, previous, threshold)),
    }


def calculate_conversions_trend(
    current: MarketingDataset,
    previous: MarketingDataset,
    threshold: float = DEFAULT_SIGNIFICANT_CHANGE_THRESHOLD,
) -> list[FunnelStage]:
    current_rates = conversion_rates_of(current)
    previous_rates = conversion_rates_of(previous)

    stages: list[FunnelStage] = []
    for name in FUNNEL_STAGE_NAMES:
        trend = compare(current_rates[name], previous_rates.get(name, 0.0), threshold)
        stages.append(
            FunnelStage(
                name=name,
                current=trend.current,
                previous=trend.previous,
                percentage_change=trend.percentage_change,
                is_significant=trend.is_significant,
            )
        )
    return stages


def calculate_channels_trend(
    current: MarketingDataset,
    previous: MarketingDataset,
    threshold: float = DEFAULT_SIGNIFICANT_CHANGE_THRESHOLD,
) -> list[ChannelTrend]:
    current_channels = analyze_channel_distribution(current.sessions, current.atoms)
    previous_channels = analyze_channel_distribution(previous.sessions, previous.atoms)

    channels: list[ChannelTrend] = []
    for name, (sessions, percentage) in current_channels.items():
        prev_sessions, prev_percentage = previous_channels.get(name, (0, 0.0))
        trend = compare(percentage, prev_percentage, threshold)
        channels.append(
            ChannelTrend(
                name=name,
                current=ChannelShare(sessions=sessions, percentage=percentage),
                previous=ChannelShare(sessions=prev_sessions, percentage=prev_percentage),
                change=trend.percentage_change,
                is_significant=trend.is_significant,
            )
        )
    return channels
