"""Cross-dataset data-quality checks. Findings are advisory and never raise."""

from __future__ import annotations

from typing import Sequence

from daily_brief.application.reporting.metrics import distinct_ids
from daily_brief.domain.models import Atom, Contact, Lead, Session, SourceData, Transaction
from daily_brief.domain.results import DataValidationResult

EXPECTED_SESSIONS_PER_DAY = 1000
MIN_SESSION_VOLUME_RATIO = 0.7


def _coverage_gap_pct(identities: set[str], known: set[str]) -> float:
    """Share of distinct identities with no match in ``known``; an empty id counts as one unmatched identity."""
    if not identities:
        return 0.0
    missing = identities.difference(known)
    return len(missing) / len(identities) * 100


def validate_dataset(
    sessions: Sequence[Session],
    leads: Sequence[Lead],
    contacts: Sequence[Contact],
    transactions: Sequence[Transaction],
    source_data: Sequence[SourceData],
    atoms: Sequence[Atom],
) -> DataValidationResult:
    issues: list[str] = []
    suggestions: list[str] = []

    collections = (
        ("Sessions", sessions),
        ("Leads", leads),
        ("Contacts", contacts),
        ("Transactions", transactions),
        ("Source data", source_data),
        ("Atoms", atoms),
    )
    for label, records in collections:
        if not records:
            issues.append(f"{label} dataset is empty")

    session_ids = distinct_ids(session.identity for session in sessions)
    contact_ids = distinct_ids(contact.client_id for contact in contacts)

    leads_gap = _coverage_gap_pct({lead.client_id for lead in leads}, session_ids)
    if leads_gap > 0:
        issues.append(f"{leads_gap:.2f}% of leads have no corresponding session data")
        suggestions.append("Improve session tracking to ensure all leads have associated session data")

    transactions_gap = _coverage_gap_pct({tx.client_id for tx in transactions}, contact_ids)
    if transactions_gap > 0:
        issues.append(f"{transactions_gap:.2f}% of transactions have no corresponding contact data")
        suggestions.append(
            "Improve contact tracking to ensure all transactions have associated contact data"
        )

    # Volume is compared against a per-day expectation; an empty dataset is already reported above.
    session_volume = len(sessions)
    if session_volume and session_volume < EXPECTED_SESSIONS_PER_DAY * MIN_SESSION_VOLUME_RATIO:
        issues.append(
            f"Session volume ({session_volume}) is significantly lower than expected ({EXPECTED_SESSIONS_PER_DAY})"
        )
        suggestions.append("Check if there are tracking issues or a genuine decrease in traffic")

    return DataValidationResult(is_valid=not issues, issues=issues, suggestions=suggestions)
