"""Analysis result types assembled into the daily brief."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class Trend:
    current: float
    previous: float
    percentage_change: float
    is_significant: bool


@dataclass(frozen=True)
class MetricTrend:
    current: float
    previous: float
    percentage_change: float
    is_significant: bool
    possible_reasons: list[str] = field(default_factory=list)

    @classmethod
    def from_trend(cls, trend: Trend, possible_reasons: list[str] | None = None) -> "MetricTrend":
        return cls(
            current=trend.current,
            previous=trend.previous,
            percentage_change=trend.percentage_change,
            is_significant=trend.is_significant,
            possible_reasons=list(possible_reasons or []),
        )

    def with_reasons(self, possible_reasons: list[str]) -> "MetricTrend":
        return replace(self, possible_reasons=list(possible_reasons))


@dataclass(frozen=True)
class FunnelStage:
    name: str
    current: float
    previous: float
    percentage_change: float
    is_significant: bool


@dataclass(frozen=True)
class ChannelShare:
    sessions: int
    percentage: float


@dataclass(frozen=True)
class ChannelTrend:
    name: str
    current: ChannelShare
    previous: ChannelShare
    change: float
    is_significant: bool


@dataclass(frozen=True)
class DataValidationResult:
    is_valid: bool
    issues: list[str]
    suggestions: list[str]


@dataclass(frozen=True)
class MetricsAnalysis:
    roas: MetricTrend
    cac: MetricTrend


@dataclass(frozen=True)
class ConversionAnalysis:
    stages: list[FunnelStage]
    insights: list[str]


@dataclass(frozen=True)
class ChannelDistributionAnalysis:
    channels: list[ChannelTrend]
    insights: list[str]


@dataclass(frozen=True)
class DataQualityImprovements:
    data_collection: list[str]
    attribution: list[str]


@dataclass(frozen=True)
class ReportingImprovements:
    additional_metrics: list[str]
    visualizations: list[str]
    automations: list[str]


@dataclass(frozen=True)
class DailyBrief:
    date: str
    data_validation: DataValidationResult
    metrics_analysis: MetricsAnalysis
    conversion_analysis: ConversionAnalysis
    channel_distribution: ChannelDistributionAnalysis
    data_quality_improvements: DataQualityImprovements
    reporting_improvements: ReportingImprovements
    summary: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
