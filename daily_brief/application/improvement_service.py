"""Application service for rule-based improvement suggestions and metric explanations."""

from __future__ import annotations

from typing import Sequence

from daily_brief.application.reporting.metrics import distinct_ids, paid_spend_and_clicks
from daily_brief.domain.models import Atom, Contact, Lead, Session, SourceData, Transaction
from daily_brief.domain.recommendation import (
    ADDITIONAL_METRICS_CATALOG,
    ATTRIBUTION_CATALOG,
    AUTOMATIONS_CATALOG,
    CHANNEL_METRIC,
    CHANNEL_VISUALIZATION,
    DATA_COLLECTION_CATALOG,
    DEVICE_METRIC,
    DEVICE_VISUALIZATION,
    MANY_CHANNEL_GROUPS,
    VISUALIZATIONS_CATALOG,
    lead_dropoff_recommendation,
    metric_reasons,
    missing_client_id_recommendation,
    missing_google_client_id_recommendation,
    paid_cpc_reason,
)
from daily_brief.domain.results import DataQualityImprovements, ReportingImprovements


def generate_data_quality_improvements(
    sessions: Sequence[Session],
    leads: Sequence[Lead],
    contacts: Sequence[Contact],
    transactions: Sequence[Transaction],
    source_data: Sequence[SourceData],
    atoms: Sequence[Atom],
) -> DataQualityImprovements:
    data_collection: list[str] = []
    attribution: list[str] = []

    sessions_without_client_id = sum(1 for session in sessions if not session.client_id)
    recommendation = missing_client_id_recommendation(sessions_without_client_id, len(sessions))
    if recommendation:
        data_collection.append(recommendation)

    leads_without_google_id = sum(1 for lead in leads if not lead.google_client_id)
    recommendation = missing_google_client_id_recommendation(leads_without_google_id, len(leads))
    if recommendation:
        data_collection.append(recommendation)

    lead_ids = distinct_ids(lead.client_id for lead in leads)
    contact_ids = distinct_ids(contact.client_id for contact in contacts)
    recommendation = lead_dropoff_recommendation(len(lead_ids - contact_ids), len(lead_ids))
    if recommendation:
        attribution.append(recommendation)

    data_collection.extend(DATA_COLLECTION_CATALOG)
    attribution.extend(ATTRIBUTION_CATALOG)
    return DataQualityImprovements(data_collection=data_collection, attribution=attribution)


def generate_reporting_improvements(
    sessions: Sequence[Session],
    leads: Sequence[Lead],
    contacts: Sequence[Contact],
    transactions: Sequence[Transaction],
    source_data: Sequence[SourceData],
    atoms: Sequence[Atom],
) -> ReportingImprovements:
    additional_metrics = list(ADDITIONAL_METRICS_CATALOG)
    visualizations = list(VISUALIZATIONS_CATALOG)
    automations = list(AUTOMATIONS_CATALOG)

    channel_groups = {atom.source_group_name for atom in atoms}
    if len(channel_groups) > MANY_CHANNEL_GROUPS:
        additional_metrics.append(CHANNEL_METRIC)
        visualizations.append(CHANNEL_VISUALIZATION)

    device_categories = {session.device_category for session in sessions}
    if len(device_categories) > 1:
        additional_metrics.append(DEVICE_METRIC)
        visualizations.append(DEVICE_VISUALIZATION)

    return ReportingImprovements(
        additional_metrics=additional_metrics,
        visualizations=visualizations,
        automations=automations,
    )


def generate_possible_reasons(
    metric_name: str,
    current: float,
    previous: float,
    source_data: Sequence[SourceData],
    atoms: Sequence[Atom],
) -> list[str]:
    reasons = metric_reasons(metric_name, current, previous)
    cpc_reason = paid_cpc_reason(*paid_spend_and_clicks(source_data, atoms))
    if cpc_reason:
        reasons.append(cpc_reason)
    return reasons
