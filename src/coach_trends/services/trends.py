"""Trend views for dashboard charts."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from coach_trends.domain.nutrition import NUTRIENT_FIELDS, MealLogRow
from coach_trends.domain.series import (
    DateRange,
    Measurement,
    PeriodSelector,
    Polarity,
    ReconstructionMode,
    SeriesPoint,
    SummaryStats,
    TrendDirection,
    TrendValidationError,
)
from coach_trends.services.cache import Cache
from coach_trends.services.daily_totals import daily_nutrient_measurements
from coach_trends.services.date_ranges import Clock, resolve_date_range
from coach_trends.services.overlap import (
    DEFAULT_SPACING_UNIT,
    WELLNESS_METRICS,
    resolve_series_offsets,
)
from coach_trends.services.reconstruction import parse_mode, reconstruct
from coach_trends.services.summary import parse_polarity, summarize, trend_direction

_logger = logging.getLogger(__name__)


class MeasurementRepository(Protocol):
    """Read-only source of measurements for a client."""

    def list_measurements(
        self, client_id: UUID, metric_key: str, end: datetime
    ) -> list[Measurement]:
        """Return every sample of a metric logged before ``end``."""

    def list_meal_logs(self, client_id: UUID, end: datetime) -> list[MealLogRow]:
        """Return meal and drink logs logged before ``end``."""


@dataclass(frozen=True)
class TrendView:
    """Reconstructed series and its summary for one metric."""

    metric_key: str
    date_range: DateRange
    mode: ReconstructionMode
    points: tuple[SeriesPoint, ...]
    stats: SummaryStats
    direction: TrendDirection


@dataclass(frozen=True)
class OverlayView:
    """Several sparse series drawn on one axis with tie-break offsets."""

    date_range: DateRange
    series: dict[str, tuple[SeriesPoint, ...]]
    offsets: dict[date, dict[str, float]]


@dataclass
class TrendService:
    """Builds chart-ready trends from raw measurements."""

    repository: MeasurementRepository
    cache: Cache
    clock: Clock
    timezone: ZoneInfo
    cache_ttl_seconds: int = 60

    def get_trend(
        self,
        client_id: UUID,
        metric_key: str,
        selector: PeriodSelector | str,
        mode: ReconstructionMode | str | None = None,
        polarity: Polarity | str = Polarity.HIGHER_IS_BETTER,
    ) -> TrendView:
        """Return the trend of one metric over a relative period.

        Nutrient intake is always sparse: a day without meals has no intake
        rather than the previous day's total. Other metrics default to
        carry-forward.
        """
        resolved_mode = _mode_for(metric_key, mode)
        resolved_polarity = parse_polarity(polarity)
        date_range = resolve_date_range(selector, self.clock(), self.timezone)
        points, stats = self._series(client_id, metric_key, date_range, resolved_mode)
        return TrendView(
            metric_key=metric_key,
            date_range=date_range,
            mode=resolved_mode,
            points=points,
            stats=stats,
            direction=trend_direction(stats, resolved_polarity),
        )

    def get_overlay(
        self,
        client_id: UUID,
        selector: PeriodSelector | str,
        metric_keys: Sequence[str] = WELLNESS_METRICS,
        spacing_unit: float = DEFAULT_SPACING_UNIT,
    ) -> OverlayView:
        """Return sparse series for several metrics plus per-date offsets."""
        date_range = resolve_date_range(selector, self.clock(), self.timezone)
        series = {
            key: self._series(
                client_id, key, date_range, ReconstructionMode.SPARSE
            )[0]
            for key in metric_keys
        }
        return OverlayView(
            date_range=date_range,
            series=series,
            offsets=resolve_series_offsets(series, metric_keys, spacing_unit),
        )

    def _series(
        self,
        client_id: UUID,
        metric_key: str,
        date_range: DateRange,
        mode: ReconstructionMode,
    ) -> tuple[tuple[SeriesPoint, ...], SummaryStats]:
        cache_key = (client_id, metric_key, date_range, mode)
        cached = self.cache.get(cache_key)
        if isinstance(cached, tuple):
            _logger.debug("Trend cache hit: metric=%s mode=%s", metric_key, mode)
            return cached

        measurements = self._measurements(client_id, metric_key, date_range)
        points = tuple(reconstruct(measurements, date_range, self.timezone, mode))
        stats = summarize(list(points))
        if stats.baseline is None:
            _logger.info(
                "No samples in range: metric=%s start=%s end=%s",
                metric_key,
                date_range.start,
                date_range.end,
            )
        result = (points, stats)
        self.cache.set(cache_key, result, ttl_seconds=self.cache_ttl_seconds)
        return result

    def _measurements(
        self, client_id: UUID, metric_key: str, date_range: DateRange
    ) -> list[Measurement]:
        end = self._range_end(date_range)
        if metric_key in NUTRIENT_FIELDS:
            logs = self.repository.list_meal_logs(client_id, end)
            return daily_nutrient_measurements(logs, self.timezone, metric_key)
        return self.repository.list_measurements(client_id, metric_key, end)

    def _range_end(self, date_range: DateRange) -> datetime:
        """Return the exclusive instant following the range's last day."""
        return datetime.combine(
            date_range.end + timedelta(days=1), time.min, tzinfo=self.timezone
        )


def _mode_for(
    metric_key: str, mode: ReconstructionMode | str | None
) -> ReconstructionMode:
    if metric_key in NUTRIENT_FIELDS:
        if mode is not None and parse_mode(mode) is not ReconstructionMode.SPARSE:
            raise TrendValidationError(
                f"Nutrient trends cannot be carried forward: {metric_key!r}"
            )
        return ReconstructionMode.SPARSE
    if mode is None:
        return ReconstructionMode.CARRY_FORWARD
    return parse_mode(mode)
