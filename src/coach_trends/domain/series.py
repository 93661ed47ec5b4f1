"""Domain models for measurement time series."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import StrEnum


class TrendValidationError(ValueError):
    """Raised when trend input is invalid and cannot be recovered from."""


class PeriodSelector(StrEnum):
    """Relative period options offered by trend charts."""

    TODAY = "today"
    LAST_7 = "last7"
    LAST_30 = "last30"
    LAST_90 = "last90"
    LAST_YEAR = "lastYear"
    ALL = "all"


class ReconstructionMode(StrEnum):
    """How days without a sample are represented."""

    CARRY_FORWARD = "carry_forward"
    SPARSE = "sparse"


class Polarity(StrEnum):
    """Which direction of change counts as progress for a metric."""

    LOWER_IS_BETTER = "lower_is_better"
    HIGHER_IS_BETTER = "higher_is_better"


class TrendDirection(StrEnum):
    """Presentation hint derived from a delta and a polarity."""

    IMPROVING = "improving"
    WORSENING = "worsening"
    UNCHANGED = "unchanged"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Measurement:
    """One observed sample for a metric."""

    metric_key: str
    timestamp: datetime
    value: float | None
    meta: dict[str, object] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar-day range."""

    start: date
    end: date

    @property
    def days(self) -> int:
        """Number of calendar days covered, both ends included."""
        return (self.end - self.start).days + 1

    def dates(self) -> Iterator[date]:
        """Yield every date from start to end."""
        for offset in range(self.days):
            yield self.start + timedelta(days=offset)


@dataclass(frozen=True)
class SeriesPoint:
    """A single day on a reconstructed series."""

    date: date
    value: float | None
    is_actual: bool
    is_anchor: bool = False


@dataclass(frozen=True)
class SummaryStats:
    """Headline numbers for a reconstructed series."""

    baseline: float | None
    current: float | None
    delta: float | None


ReconstructedSeries = list[SeriesPoint]
