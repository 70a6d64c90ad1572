"""Metric calculators and shared numeric/formatting utilities for reporting."""

from __future__ import annotations

from typing import Iterable, Sequence

from daily_brief.domain.models import Atom, Contact, Lead, Session, SourceData, Transaction

VISITOR_TO_LEAD = "Visitor to Lead"
LEAD_TO_CONTACT = "Lead to Contact"
CONTACT_TO_CUSTOMER = "Contact to Customer"
OVERALL_CONVERSION = "Overall (Visitor to Customer)"
FUNNEL_STAGE_NAMES: tuple[str, ...] = (VISITOR_TO_LEAD, LEAD_TO_CONTACT, CONTACT_TO_CUSTOMER, OVERALL_CONVERSION)


def safe_ratio(num: float, den: float) -> float:
    if den <= 0:
        return 0.0
    return num / den


def safe_rate(num: float, den: float) -> float:
    return safe_ratio(num, den) * 100


def safe_pct_change(curr: float, prev: float) -> float:
    if prev <= 0:
        return 0.0
    return (curr - prev) / prev * 100


def distinct_ids(values: Iterable[str | None]) -> set[str]:
    return {value for value in values if value}


def total_spend(source_data: Sequence[SourceData]) -> float:
    return sum(row.budget_spent for row in source_data)


def total_revenue(transactions: Sequence[Transaction]) -> float:
    return sum(tx.paid_amount for tx in transactions)


def first_time_customers(transactions: Sequence[Transaction]) -> set[str]:
    return distinct_ids(tx.client_id for tx in transactions if tx.is_first_client_payment)


def calculate_roas(transactions: Sequence[Transaction], source_data: Sequence[SourceData]) -> float:
    return safe_ratio(total_revenue(transactions), total_spend(source_data))


def calculate_cac(transactions: Sequence[Transaction], source_data: Sequence[SourceData]) -> float:
    return safe_ratio(total_spend(source_data), len(first_time_customers(transactions)))


def funnel_counts(
    sessions: Sequence[Session],
    leads: Sequence[Lead],
    contacts: Sequence[Contact],
    transactions: Sequence[Transaction],
) -> dict[str, int]:
    """Distinct identities reaching each funnel stage."""
    return {
        "visitors": len(distinct_ids(session.identity for session in sessions)),
        "leads": len(distinct_ids(lead.client_id for lead in leads)),
        "contacts": len(distinct_ids(contact.client_id for contact in contacts)),
        "customers": len(first_time_customers(transactions)),
    }


def calculate_conversion_rates(
    sessions: Sequence[Session],
    leads: Sequence[Lead],
    contacts: Sequence[Contact],
    transactions: Sequence[Transaction],
) -> dict[str, float]:
    counts = funnel_counts(sessions, leads, contacts, transactions)
    return {
        VISITOR_TO_LEAD: safe_rate(counts["leads"], counts["visitors"]),
        LEAD_TO_CONTACT: safe_rate(counts["contacts"], counts["leads"]),
        CONTACT_TO_CUSTOMER: safe_rate(counts["customers"], counts["contacts"]),
        OVERALL_CONVERSION: safe_rate(counts["customers"], counts["visitors"]),
    }


def analyze_channel_distribution(sessions: Sequence[Session], atoms: Sequence[Atom]) -> dict[str, tuple[int, float]]:
    """Count atom directory entries per channel group, relative to the period's session volume.

    Sessions carry no atom reference, so the count is taken from the directory
    itself; only the percentage moves with traffic.
    """
    counts: dict[str, int] = {}
    for atom in atoms:
        counts[atom.source_group_name] = counts.get(atom.source_group_name, 0) + 1

    denominator = max(len(sessions), 1)
    return {name: (count, count / denominator * 100) for name, count in counts.items()}


def paid_spend_and_clicks(source_data: Sequence[SourceData], atoms: Sequence[Atom]) -> tuple[float, float]:
    paid_atom_ids = {atom.atom_id for atom in atoms if atom.is_paid}
    paid_rows = [row for row in source_data if row.atom_id in paid_atom_ids]
    return total_spend(paid_rows), sum(row.clicks for row in paid_rows)


def fmt_signed_pct(value: float) -> str:
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.2f}%"


def fmt_direction(value: float) -> str:
    """Render a percentage change as ``up 12.50%`` / ``down 3.00%``."""
    word = "up" if value >= 0 else "down"
    return f"{word} {abs(value):.2f}%"
