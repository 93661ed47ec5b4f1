"""Rebuild dense daily series from irregularly sampled measurements.

Two policies share the same calendar grid:

* carry-forward: days without a sample repeat the last known value and are
  flagged as not actual. Days before the first ever sample stay ``None``.
* sparse: days without a sample are ``None`` so the renderer draws a gap, and
  the last sample before the range is prepended as an anchor point.

Measurements are bucketed by calendar date in the reference timezone. When a
day has several samples the one with the latest timestamp wins.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo

from coach_trends.domain.series import (
    DateRange,
    Measurement,
    ReconstructedSeries,
    ReconstructionMode,
    SeriesPoint,
    TrendValidationError,
)


@dataclass(frozen=True)
class _DailySamples:
    in_range: dict[date, float]
    prior: tuple[date, float] | None


def carry_forward(
    measurements: Iterable[Measurement], date_range: DateRange, tz: ZoneInfo
) -> ReconstructedSeries:
    """Return one point per day, forward-filling days without a sample."""
    samples = _bucket_by_day(measurements, date_range, tz)
    last_known = samples.prior[1] if samples.prior else None
    series: ReconstructedSeries = []
    for day in date_range.dates():
        actual = samples.in_range.get(day)
        if actual is not None:
            last_known = actual
            series.append(SeriesPoint(date=day, value=actual, is_actual=True))
        else:
            series.append(SeriesPoint(date=day, value=last_known, is_actual=False))
    return series


def sparse(
    measurements: Iterable[Measurement], date_range: DateRange, tz: ZoneInfo
) -> ReconstructedSeries:
    """Return one point per day, leaving days without a sample as gaps."""
    samples = _bucket_by_day(measurements, date_range, tz)
    series: ReconstructedSeries = []
    if samples.prior is not None:
        anchor_day, anchor_value = samples.prior
        series.append(
            SeriesPoint(
                date=anchor_day, value=anchor_value, is_actual=True, is_anchor=True
            )
        )
    for day in date_range.dates():
        actual = samples.in_range.get(day)
        series.append(SeriesPoint(date=day, value=actual, is_actual=actual is not None))
    return series


def reconstruct(
    measurements: Iterable[Measurement],
    date_range: DateRange,
    tz: ZoneInfo,
    mode: ReconstructionMode | str,
) -> ReconstructedSeries:
    """Dispatch to the reconstructor for ``mode``."""
    resolved = parse_mode(mode)
    if resolved is ReconstructionMode.SPARSE:
        return sparse(measurements, date_range, tz)
    return carry_forward(measurements, date_range, tz)


def parse_mode(raw: ReconstructionMode | str) -> ReconstructionMode:
    """Parse a reconstruction mode name."""
    if isinstance(raw, ReconstructionMode):
        return raw
    try:
        return ReconstructionMode(raw)
    except ValueError:
        raise TrendValidationError(f"Unknown reconstruction mode: {raw!r}") from None


def without_anchor(series: ReconstructedSeries) -> ReconstructedSeries:
    """Drop leading anchor points, keeping only days inside the range."""
    return [point for point in series if not point.is_anchor]


def _bucket_by_day(
    measurements: Iterable[Measurement], date_range: DateRange, tz: ZoneInfo
) -> _DailySamples:
    """Reduce samples to one value per local day, latest timestamp first."""
    usable = [m for m in _validated(measurements) if m.value is not None]
    usable.sort(key=lambda m: m.timestamp)

    in_range: dict[date, float] = {}
    prior: tuple[date, float] | None = None
    for measurement in usable:
        day = measurement.timestamp.astimezone(tz).date()
        value = float(measurement.value)  # type: ignore[arg-type]
        if day < date_range.start:
            # Sorted ascending, so the last assignment is the latest prior sample.
            prior = (day, value)
        elif day <= date_range.end:
            in_range[day] = value
    return _DailySamples(in_range=in_range, prior=prior)


def _validated(measurements: Iterable[Measurement]) -> list[Measurement]:
    checked = []
    for measurement in measurements:
        timestamp = measurement.timestamp
        if not isinstance(timestamp, datetime) or timestamp.tzinfo is None:
            raise TrendValidationError(
                f"Malformed timestamp for {measurement.metric_key!r}: {timestamp!r}"
            )
        checked.append(measurement)
    return checked
