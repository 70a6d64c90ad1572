"""Daily brief orchestrator.

The brief is produced by a fixed, linear sequence of stages:

    load_data -> validate_data -> analyze_metrics -> analyze_conversions
    -> analyze_channels -> suggest_data_improvements
    -> suggest_reporting_improvements -> generate_summary -> complete_brief

Each stage receives the accumulated ``BriefState`` and returns a new state with
its own slice filled in. The orchestrator wraps every stage call in a
``StageSucceeded | StageFailed`` outcome; the first failure routes to
``handle_error`` and ends the run. Nothing is retried.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple, TypeVar, Union

from daily_brief.application.improvement_service import (
    generate_data_quality_improvements,
    generate_possible_reasons,
    generate_reporting_improvements,
)
from daily_brief.application.insight_service import channel_insights, conversion_insights, executive_summary
from daily_brief.application.trend_service import (
    DEFAULT_SIGNIFICANT_CHANGE_THRESHOLD,
    calculate_channels_trend,
    calculate_conversions_trend,
    calculate_metrics_trend,
)
from daily_brief.application.validation_service import validate_dataset
from daily_brief.domain.models import MarketingDataset
from daily_brief.domain.periods import AnalysisWindow
from daily_brief.domain.results import (
    ChannelDistributionAnalysis,
    ConversionAnalysis,
    DailyBrief,
    DataQualityImprovements,
    DataValidationResult,
    MetricsAnalysis,
    ReportingImprovements,
)
from daily_brief.errors import BriefStageError
from daily_brief.infrastructure.csv_repository import load_marketing_dataset
from daily_brief.infrastructure.text_generator import TextGenerator
from daily_brief.utils.logger import log

if TYPE_CHECKING:
    from daily_brief.config import Settings

# The analysis stages compare against a fixed 30-day window; HISTORICAL_DAYS is not consulted.
ANALYSIS_LOOKBACK_DAYS = 30

T = TypeVar("T")
DatasetLoader = Callable[[Path, str], MarketingDataset]


class Stage(str, Enum):
    LOAD_DATA = "load_data"
    VALIDATE_DATA = "validate_data"
    ANALYZE_METRICS = "analyze_metrics"
    ANALYZE_CONVERSIONS = "analyze_conversions"
    ANALYZE_CHANNELS = "analyze_channels"
    SUGGEST_DATA_IMPROVEMENTS = "suggest_data_improvements"
    SUGGEST_REPORTING_IMPROVEMENTS = "suggest_reporting_improvements"
    GENERATE_SUMMARY = "generate_summary"
    COMPLETE_BRIEF = "complete_brief"
    HANDLE_ERROR = "handle_error"


@dataclass(frozen=True)
class BriefState:
    date: str
    data_path: Path
    data_prefix: str = "test"
    dataset: Optional[MarketingDataset] = None
    data_validation: Optional[DataValidationResult] = None
    metrics_analysis: Optional[MetricsAnalysis] = None
    conversion_analysis: Optional[ConversionAnalysis] = None
    channel_distribution: Optional[ChannelDistributionAnalysis] = None
    data_quality_improvements: Optional[DataQualityImprovements] = None
    reporting_improvements: Optional[ReportingImprovements] = None
    summary: Optional[str] = None
    daily_brief: Optional[DailyBrief] = None
    error: Optional[Exception] = None
    failed_stage: Optional[Stage] = None
    completed_stages: Tuple[Stage, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.daily_brief is not None


@dataclass(frozen=True)
class StageSucceeded:
    stage: Stage
    state: BriefState


@dataclass(frozen=True)
class StageFailed:
    stage: Stage
    error: Exception


StageOutcome = Union[StageSucceeded, StageFailed]
StageFn = Callable[[BriefState], BriefState]


def _require(value: Optional[T], message: str) -> T:
    if value is None:
        raise BriefStageError(message)
    return value


class BriefPipeline:
    """Finite-state orchestrator for one daily brief run."""

    def __init__(
        self,
        text_generator: TextGenerator,
        loader: DatasetLoader = load_marketing_dataset,
        significant_change_threshold: float = DEFAULT_SIGNIFICANT_CHANGE_THRESHOLD,
        lookback_days: int = ANALYSIS_LOOKBACK_DAYS,
        data_prefix: str = "test",
    ):
        self.text_generator = text_generator
        self.loader = loader
        self.threshold = significant_change_threshold
        self.lookback_days = lookback_days
        self.data_prefix = data_prefix

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        text_generator: TextGenerator,
        loader: DatasetLoader = load_marketing_dataset,
    ) -> "BriefPipeline":
        return cls(
            text_generator=text_generator,
            loader=loader,
            significant_change_threshold=settings.significant_change_threshold,
            data_prefix=settings.data_prefix,
        )

    def stages(self) -> List[Tuple[Stage, StageFn]]:
        return [
            (Stage.LOAD_DATA, self.load_data),
            (Stage.VALIDATE_DATA, self.validate_data),
            (Stage.ANALYZE_METRICS, self.analyze_metrics),
            (Stage.ANALYZE_CONVERSIONS, self.analyze_conversions),
            (Stage.ANALYZE_CHANNELS, self.analyze_channels),
            (Stage.SUGGEST_DATA_IMPROVEMENTS, self.suggest_data_improvements),
            (Stage.SUGGEST_REPORTING_IMPROVEMENTS, self.suggest_reporting_improvements),
            (Stage.GENERATE_SUMMARY, self.generate_summary),
            (Stage.COMPLETE_BRIEF, self.complete_brief),
        ]

    def run(self, date: str, data_path: Path | str) -> BriefState:
        state = BriefState(date=date, data_path=Path(data_path), data_prefix=self.data_prefix)
        for stage, step in self.stages():
            outcome = self.execute(stage, step, state)
            if isinstance(outcome, StageFailed):
                return self.handle_error(replace(state, error=outcome.error, failed_stage=outcome.stage))
            state = replace(outcome.state, completed_stages=state.completed_stages + (stage,))
        return state

    @staticmethod
    def execute(stage: Stage, step: StageFn, state: BriefState) -> StageOutcome:
        log.debug(f"Entering stage {stage.value}")
        try:
            return StageSucceeded(stage=stage, state=step(state))
        except Exception as exc:
            return StageFailed(stage=stage, error=exc)

    def handle_error(self, state: BriefState) -> BriefState:
        stage = state.failed_stage.value if state.failed_stage else "unknown"
        log.opt(exception=state.error).error(f"Error in brief workflow at stage {stage}: {state.error}")
        return state

    def _window(self, state: BriefState) -> AnalysisWindow:
        return AnalysisWindow(analysis_date=state.date, lookback_days=self.lookback_days)

    def load_data(self, state: BriefState) -> BriefState:
        dataset = self.loader(state.data_path, state.data_prefix)
        return replace(state, dataset=dataset)

    def validate_data(self, state: BriefState) -> BriefState:
        log.info("Validating data quality...")
        dataset = _require(state.dataset, "Test data not loaded")
        validation = validate_dataset(
            dataset.sessions,
            dataset.leads,
            dataset.contacts,
            dataset.transactions,
            dataset.source_data,
            dataset.atoms,
        )
        return replace(state, data_validation=validation)

    def analyze_metrics(self, state: BriefState) -> BriefState:
        log.info("Analyzing key metrics...")
        dataset = _require(state.dataset, "Data not loaded")
        window = self._window(state)
        current, previous = window.split(dataset)
        log.info(
            f"Comparing {state.date} with previous period from {window.previous_start}: "
            f"{len(previous.transactions)} transactions, {len(previous.source_data)} source data entries"
        )

        trends = calculate_metrics_trend(current, previous, self.threshold)
        roas = trends["roas"]
        cac = trends["cac"]
        metrics = MetricsAnalysis(
            roas=roas.with_reasons(
                generate_possible_reasons("ROAS", roas.current, roas.previous, dataset.source_data, dataset.atoms)
            ),
            cac=cac.with_reasons(
                generate_possible_reasons("CAC", cac.current, cac.previous, dataset.source_data, dataset.atoms)
            ),
        )
        return replace(state, metrics_analysis=metrics)

    def analyze_conversions(self, state: BriefState) -> BriefState:
        log.info("Analyzing conversion rates...")
        dataset = _require(state.dataset, "Data not loaded")
        window = self._window(state)
        current, previous = window.split(dataset)
        log.info(
            f"Previous period from {window.previous_start}: {len(previous.sessions)} sessions, "
            f"{len(previous.leads)} leads, {len(previous.contacts)} contacts, "
            f"{len(previous.transactions)} transactions"
        )

        stages = calculate_conversions_trend(current, previous, self.threshold)
        insights = conversion_insights(self.text_generator, stages)
        return replace(state, conversion_analysis=ConversionAnalysis(stages=stages, insights=insights))

    def analyze_channels(self, state: BriefState) -> BriefState:
        log.info("Analyzing channel distribution...")
        dataset = _require(state.dataset, "Data not loaded")
        window = self._window(state)
        current, previous = window.split(dataset)
        log.info(f"Previous period from {window.previous_start}: {len(previous.sessions)} sessions")

        channels = calculate_channels_trend(current, previous, self.threshold)
        insights = channel_insights(self.text_generator, channels)
        return replace(state, channel_distribution=ChannelDistributionAnalysis(channels=channels, insights=insights))

    def suggest_data_improvements(self, state: BriefState) -> BriefState:
        log.info("Suggesting data quality improvements...")
        dataset = _require(state.dataset, "Test data not loaded")
        improvements = generate_data_quality_improvements(
            dataset.sessions,
            dataset.leads,
            dataset.contacts,
            dataset.transactions,
            dataset.source_data,
            dataset.atoms,
        )
        return replace(state, data_quality_improvements=improvements)

    def suggest_reporting_improvements(self, state: BriefState) -> BriefState:
        log.info("Suggesting reporting improvements...")
        dataset = _require(state.dataset, "Test data not loaded")
        improvements = generate_reporting_improvements(
            dataset.sessions,
            dataset.leads,
            dataset.contacts,
            dataset.transactions,
            dataset.source_data,
            dataset.atoms,
        )
        return replace(state, reporting_improvements=improvements)

    def generate_summary(self, state: BriefState) -> BriefState:
        log.info("Generating summary...")
        message = "Missing required analysis data"
        summary = executive_summary(
            self.text_generator,
            state.date,
            _require(state.data_validation, message),
            _require(state.metrics_analysis, message),
            _require(state.conversion_analysis, message),
            _require(state.channel_distribution, message),
            _require(state.data_quality_improvements, message),
            _require(state.reporting_improvements, message),
        )
        return replace(state, summary=summary)

    def complete_brief(self, state: BriefState) -> BriefState:
        log.info("Finalizing daily brief...")
        message = "Missing required data for daily brief"
        if not state.date or not state.summary:
            raise BriefStageError(message)
        brief = DailyBrief(
            date=state.date,
            data_validation=_require(state.data_validation, message),
            metrics_analysis=_require(state.metrics_analysis, message),
            conversion_analysis=_require(state.conversion_analysis, message),
            channel_distribution=_require(state.channel_distribution, message),
            data_quality_improvements=_require(state.data_quality_improvements, message),
            reporting_improvements=_require(state.reporting_improvements, message),
            summary=state.summary,
        )
        return replace(state, daily_brief=brief)
