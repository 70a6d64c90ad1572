"""Date-range helpers for current vs previous period comparison."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Iterable, Protocol, TypeVar

if TYPE_CHECKING:
    from daily_brief.domain.models import MarketingDataset

DATE_FORMAT = "%Y-%m-%d"
DEFAULT_LOOKBACK_DAYS = 30


class Dated(Protocol):
    @property
    def record_date(self) -> str: ...


DatedT = TypeVar("DatedT", bound=Dated)


def extract_date_part(value: str | None) -> str:
    """Return the ``YYYY-MM-DD`` part of a shifted timestamp (text before the first space)."""
    if not value:
        return ""
    return str(value).split(" ", 1)[0]


def filter_by_range(records: Iterable[DatedT], start: str, end: str) -> list[DatedT]:
    """Keep records dated within ``[start, end)``; dates compare as ISO strings."""
    return [record for record in records if start <= record.record_date < end]


def previous_period_start(current_date: str, lookback_days: int = DEFAULT_LOOKBACK_DAYS) -> str:
    current = datetime.strptime(current_date, DATE_FORMAT).date()
    return (current - timedelta(days=lookback_days)).strftime(DATE_FORMAT)


@dataclass(frozen=True)
class AnalysisWindow:
    """Comparison window anchored at the analysis date.

    The current period is the full loaded dataset; the previous period is the
    ``lookback_days`` window that ends, exclusively, at the analysis date.
    """

    analysis_date: str
    lookback_days: int = DEFAULT_LOOKBACK_DAYS

    @property
    def previous_start(self) -> str:
        return previous_period_start(self.analysis_date, self.lookback_days)

    @property
    def previous_end(self) -> str:
        return self.analysis_date

    def split(self, dataset: "MarketingDataset") -> tuple["MarketingDataset", "MarketingDataset"]:
        return dataset, dataset.filter_by_range(self.previous_start, self.previous_end)
