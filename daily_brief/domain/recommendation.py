"""Domain policies for metric explanations and improvement recommendations."""

from __future__ import annotations

LEAD_CONTACT_DROPOFF_THRESHOLD = 0.8
MISSING_ID_THRESHOLD = 0.1
MANY_CHANNEL_GROUPS = 3

DATA_COLLECTION_CATALOG: tuple[str, ...] = (
    "Implement server-side tracking to reduce data loss from ad blockers",
    "Enhance user identification with consistent first-party cookies across domains",
    "Validate UTM parameters for consistency and accuracy across marketing campaigns",
)

ATTRIBUTION_CATALOG: tuple[str, ...] = (
    "Implement multi-touch attribution modeling to better understand the full customer journey",
    "Consider time-decay models to give appropriate credit to touchpoints based on recency",
    "Add view-through attribution for display and video channels to capture impression impact",
)

ADDITIONAL_METRICS_CATALOG: tuple[str, ...] = (
    "Customer Lifetime Value (CLV) to better assess long-term customer profitability",
    "Visitor-to-Lead Conversion Rate by channel to identify top-performing acquisition sources",
    "Cost Per Lead (CPL) broken down by campaign to optimize lead generation efforts",
    "Customer retention rate and churn metrics to monitor customer satisfaction",
)

VISUALIZATIONS_CATALOG: tuple[str, ...] = (
    "Multi-touch attribution funnel visualization showing channel impact at each customer journey stage",
    "Geographic heat map of customer concentration to identify regional performance patterns",
    "Cohort analysis chart to track how customer behavior evolves over time",
    "Campaign ROI comparison dashboard with time-series view for trend analysis",
)

AUTOMATIONS_CATALOG: tuple[str, ...] = (
    "Implement automated anomaly detection to flag unusual changes in conversion metrics",
    "Set up regular data quality audits to identify and fix tracking issues",
    "Create automated alerting for significant drops in channel performance",
    "Develop predictive models to forecast future conversion trends based on current data",
)

CHANNEL_METRIC = "Channel-specific CAC and ROAS metrics to better compare performance across marketing channels"
CHANNEL_VISUALIZATION = "Channel mix optimization tool to simulate budget allocation scenarios"
DEVICE_METRIC = "Conversion rate by device type to identify platform-specific optimization opportunities"
DEVICE_VISUALIZATION = "Device performance comparison dashboard showing conversion funnel by device type"
LEAD_CONTACT_DROPOFF = "High drop-off rate between leads and contacts - investigate lead qualification process"

_METRIC_REASONS: dict[tuple[str, bool], tuple[str, ...]] = {
    ("ROAS", True): (
        "Improved ad targeting may have led to higher conversion rates",
        "Better performing products or offers could be driving higher order values",
        "Seasonal effects might be positively impacting purchasing behavior",
    ),
    ("ROAS", False): (
        "Ad costs may have increased without a corresponding increase in revenue",
        "Ad targeting may be less effective, reaching less qualified prospects",
        "Competitive landscape may have changed, affecting conversion rates",
    ),
    ("CAC", True): (
        "Rising ad costs in the market may be increasing acquisition costs",
        "Decreased ad effectiveness could be requiring more spend per acquisition",
        "Market saturation might be making it harder to find new customers",
    ),
    ("CAC", False): (
        "Improved targeting strategies may be more efficiently acquiring customers",
        "Optimization of ad spend across channels could be reducing waste",
        "Increased brand awareness might be lowering the cost to convert customers",
    ),
}


def metric_reasons(metric_name: str, current: float, previous: float) -> list[str]:
    """Return the catalog explanations for a metric moving up or down (flat counts as down)."""
    increased = current > previous
    return list(_METRIC_REASONS.get((metric_name.upper(), increased), ()))


def paid_cpc_reason(paid_spend: float, paid_clicks: float) -> str | None:
    if paid_spend <= 0:
        return None
    cpc = paid_spend / paid_clicks if paid_clicks > 0 else 0.0
    return f"Average cost per click across paid channels is {cpc:.2f}"


def missing_client_id_recommendation(missing: int, total: int) -> str | None:
    if total <= 0 or missing / total <= MISSING_ID_THRESHOLD:
        return None
    return (
        "Improve client ID tracking in sessions - currently missing in "
        f"{missing / total * 100:.2f}% of sessions"
    )


def missing_google_client_id_recommendation(missing: int, total: int) -> str | None:
    if total <= 0 or missing / total <= MISSING_ID_THRESHOLD:
        return None
    return (
        "Improve Google Client ID tracking in leads - currently missing in "
        f"{missing / total * 100:.2f}% of leads"
    )


def lead_dropoff_recommendation(unconverted: int, total: int) -> str | None:
    if total <= 0 or unconverted / total <= LEAD_CONTACT_DROPOFF_THRESHOLD:
        return None
    return LEAD_CONTACT_DROPOFF
