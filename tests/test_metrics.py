"""Unit tests for metric calculators."""

from __future__ import annotations

import pytest

from builders import atom, contact, lead, session, spend, transaction
from daily_brief.application.reporting.metrics import (
    CONTACT_TO_CUSTOMER,
    LEAD_TO_CONTACT,
    OVERALL_CONVERSION,
    VISITOR_TO_LEAD,
    analyze_channel_distribution,
    calculate_cac,
    calculate_conversion_rates,
    calculate_roas,
    fmt_direction,
    fmt_signed_pct,
    funnel_counts,
    paid_spend_and_clicks,
    safe_pct_change,
)
from daily_brief.domain.models import MarketingDataset, Session


def test_funnel_scenario_metrics(dataset: MarketingDataset) -> None:
    """50 visitors, 5 leads, 3 contacts, one first-time customer paying 50 on a spend of 20."""
    rates = calculate_conversion_rates(dataset.sessions, dataset.leads, dataset.contacts, dataset.transactions)

    assert calculate_roas(dataset.transactions, dataset.source_data) == pytest.approx(2.5)
    assert calculate_cac(dataset.transactions, dataset.source_data) == pytest.approx(20.0)
    assert rates[VISITOR_TO_LEAD] == pytest.approx(10.0)
    assert rates[LEAD_TO_CONTACT] == pytest.approx(60.0)
    assert rates[CONTACT_TO_CUSTOMER] == pytest.approx(100 / 3)
    assert rates[OVERALL_CONVERSION] == pytest.approx(2.0)
    assert list(rates) == [VISITOR_TO_LEAD, LEAD_TO_CONTACT, CONTACT_TO_CUSTOMER, OVERALL_CONVERSION]


def test_reference_day_scenario() -> None:
    """100 sessions, 10 leads, 5 contacts, 2 first payments of 50 and a spend of 40."""
    identities = [f"u{index}" for index in range(100)]
    sessions = [session(identity) for identity in identities]
    leads = [lead(identity) for identity in identities[:10]]
    contacts = [contact(identity) for identity in identities[:5]]
    transactions = [transaction("u0", 50.0), transaction("u1", 50.0)]
    source_data = [spend(40.0)]

    rates = calculate_conversion_rates(sessions, leads, contacts, transactions)

    assert calculate_roas(transactions, source_data) == pytest.approx(2.5)
    assert calculate_cac(transactions, source_data) == pytest.approx(20.0)
    assert rates[VISITOR_TO_LEAD] == pytest.approx(10.0)
    assert rates[LEAD_TO_CONTACT] == pytest.approx(50.0)
    assert rates[CONTACT_TO_CUSTOMER] == pytest.approx(40.0)
    assert rates[OVERALL_CONVERSION] == pytest.approx(2.0)


def test_zero_denominators_yield_zero() -> None:
    rates = calculate_conversion_rates([], [], [], [])

    assert calculate_roas([transaction("u", 10.0)], []) == 0.0
    assert calculate_cac([], [spend(100.0)]) == 0.0
    assert all(value == 0.0 for value in rates.values())
    assert safe_pct_change(5.0, 0.0) == 0.0


def test_cac_counts_distinct_first_time_customers() -> None:
    transactions = [
        transaction("u1", 10.0, "2024-03-01"),
        transaction("u1", 10.0, "2024-03-02"),
        transaction("u2", 10.0, first=False),
        transaction("", 10.0, "2024-03-03"),
    ]

    assert calculate_cac(transactions, [spend(30.0)]) == pytest.approx(30.0)


def test_funnel_counts_ignore_empty_identities() -> None:
    sessions = [
        session("u1"),
        session("u2"),
        session("u1", "2024-03-13"),
        Session(id="anonymous", user_pseudo_id="", timestamp_shifted="2024-03-14 10:00:00"),
    ]

    counts = funnel_counts(sessions, [], [], [])

    assert counts["visitors"] == 2


def test_channel_distribution_counts_directory_entries() -> None:
    atoms = [atom("a1", "Search"), atom("a2", "Search"), atom("a3", "Social")]
    sessions = [session(f"u{index}") for index in range(4)]

    distribution = analyze_channel_distribution(sessions, atoms)

    assert list(distribution) == ["Search", "Social"]
    assert distribution["Search"] == (2, pytest.approx(50.0))
    assert distribution["Social"] == (1, pytest.approx(25.0))


def test_channel_distribution_without_sessions_uses_unit_denominator() -> None:
    distribution = analyze_channel_distribution([], [atom("a1", "Search")])

    assert distribution["Search"] == (1, pytest.approx(100.0))


def test_paid_spend_and_clicks_only_counts_paid_atoms() -> None:
    atoms = [atom("a1", "Search", paid=True), atom("a2", "Organic")]
    rows = [spend(40.0, atom_id="a1", clicks=20), spend(5.0, atom_id="a2", clicks=100)]

    assert paid_spend_and_clicks(rows, atoms) == (pytest.approx(40.0), pytest.approx(20.0))


def test_percentage_formatters() -> None:
    assert fmt_signed_pct(12.5) == "+12.50%"
    assert fmt_signed_pct(-3.0) == "-3.00%"
    assert fmt_direction(0.0) == "up 0.00%"
    assert fmt_direction(-7.5) == "down 7.50%"
