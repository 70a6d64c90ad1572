"""Application service turning structured trends into prose via an injected text generator."""

from __future__ import annotations

from typing import List

from daily_brief.application.reporting.rendering import (
    channel_insights_prompt,
    conversion_insights_prompt,
    parse_insights,
    summary_prompt,
)
from daily_brief.domain.results import (
    ChannelDistributionAnalysis,
    ChannelTrend,
    ConversionAnalysis,
    DataQualityImprovements,
    DataValidationResult,
    FunnelStage,
    MetricsAnalysis,
    ReportingImprovements,
)
from daily_brief.infrastructure.text_generator import TextGenerator


def conversion_insights(generator: TextGenerator, stages: List[FunnelStage]) -> List[str]:
    return parse_insights(generator.generate_text(conversion_insights_prompt(stages)))


def channel_insights(generator: TextGenerator, channels: List[ChannelTrend]) -> List[str]:
    return parse_insights(generator.generate_text(channel_insights_prompt(channels)))


def executive_summary(
    generator: TextGenerator,
    date: str,
    validation: DataValidationResult,
    metrics: MetricsAnalysis,
    conversions: ConversionAnalysis,
    channels: ChannelDistributionAnalysis,
    data_quality: DataQualityImprovements,
    reporting: ReportingImprovements,
) -> str:
    prompt = summary_prompt(date, validation, metrics, conversions, channels, data_quality, reporting)
    return generator.generate_text(prompt).strip()
