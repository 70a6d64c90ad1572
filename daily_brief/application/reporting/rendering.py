"""Text rendering helpers: model prompts, insight parsing and the console summary."""

from __future__ import annotations

import re
from typing import List

from daily_brief.application.reporting.metrics import fmt_direction, fmt_signed_pct
from daily_brief.domain.results import (
    ChannelTrend,
    ConversionAnalysis,
    ChannelDistributionAnalysis,
    DailyBrief,
    DataQualityImprovements,
    DataValidationResult,
    FunnelStage,
    MetricsAnalysis,
    MetricTrend,
    ReportingImprovements,
)

_NUMBERING = re.compile(r"^\d+\.\s*")


def parse_insights(text: str) -> List[str]:
    """Split a model response into one insight per non-blank line, without list numbering."""
    insights: List[str] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        insights.append(_NUMBERING.sub("", line).strip())
    return insights


def _bullets(items: List[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def conversion_insights_prompt(stages: List[FunnelStage]) -> str:
    lines = [
        f"- {stage.name}: {stage.current:.2f}% ({fmt_direction(stage.percentage_change)} "
        f"from previous period's {stage.previous:.2f}%)"
        for stage in stages
    ]
    return (
        "You are an analytics expert analyzing marketing funnel conversion rates.\n"
        "Based on the following conversion rate data, provide 3-5 meaningful insights:\n\n"
        "Conversion Rates:\n"
        f"{chr(10).join(lines)}\n\n"
        "Provide concise, data-driven insights about what these conversion rates and their changes "
        "mean for the business.\n"
        "Insights:"
    )


def channel_insights_prompt(channels: List[ChannelTrend]) -> str:
    lines = [
        f"- {channel.name}: {channel.current.percentage:.2f}% ({channel.current.sessions} sessions), "
        f"{fmt_direction(channel.change)} from previous period's {channel.previous.percentage:.2f}%"
        for channel in channels
    ]
    return (
        "You are a marketing analytics expert analyzing traffic channel distribution.\n"
        "Based on the following channel data, provide 3-5 meaningful insights about the current "
        "channel performance and trends:\n\n"
        "Channel Distribution:\n"
        f"{chr(10).join(lines)}\n\n"
        "Provide concise, data-driven insights about what this channel distribution and its changes "
        "mean for marketing strategy.\n"
        "Insights:"
    )


def _metric_line(label: str, trend: MetricTrend) -> str:
    significance = "significant" if trend.is_significant else "not significant"
    return f"- {label}: {trend.current:.2f} ({fmt_direction(trend.percentage_change)}, {significance})"


def summary_prompt(
    date: str,
    validation: DataValidationResult,
    metrics: MetricsAnalysis,
    conversions: ConversionAnalysis,
    channels: ChannelDistributionAnalysis,
    data_quality: DataQualityImprovements,
    reporting: ReportingImprovements,
) -> str:
    issues = ", ".join(validation.issues) if validation.issues else "None"
    return (
        "You are a senior marketing analyst creating a summary of the day's marketing performance data.\n"
        "Create a concise but comprehensive executive summary based on the following information:\n\n"
        f"Date: {date}\n\n"
        "Data Quality:\n"
        f"- Valid: {'Yes' if validation.is_valid else 'No'}\n"
        f"- Issues: {issues}\n\n"
        "Key Metrics:\n"
        f"{_metric_line('ROAS', metrics.roas)}\n"
        f"{_metric_line('CAC', metrics.cac)}\n\n"
        "Conversion Insights:\n"
        f"{_bullets(conversions.insights)}\n\n"
        "Channel Distribution Insights:\n"
        f"{_bullets(channels.insights)}\n\n"
        "Key Data Quality Improvement Recommendations:\n"
        f"{_bullets(data_quality.data_collection[:2])}\n\n"
        "Key Reporting Improvement Recommendations:\n"
        f"{_bullets(reporting.additional_metrics[:2])}\n\n"
        "Your summary should be about 150-200 words, highlighting the most important findings and "
        "actionable insights, written in a professional business tone.\n"
        "Summary:"
    )


def console_summary(brief: DailyBrief) -> str:
    validation = brief.data_validation
    roas = brief.metrics_analysis.roas
    cac = brief.metrics_analysis.cac

    lines = [
        "===== DAILY BRIEF SUMMARY =====",
        f"Date: {brief.date}",
        "",
        f"Data Quality: {'Good' if validation.is_valid else 'Issues Found'}",
    ]
    if validation.issues:
        lines.extend(["", "Data Issues:", _bullets(validation.issues)])
    lines.extend(
        [
            "",
            "Key Metrics:",
            f"- ROAS: {roas.current:.2f} ({fmt_signed_pct(roas.percentage_change)})",
            f"- CAC: {cac.current:.2f} ({fmt_signed_pct(cac.percentage_change)})",
            "",
            "Summary:",
            brief.summary,
            "",
            "=================================",
        ]
    )
    return "\n".join(lines)
