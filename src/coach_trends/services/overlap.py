"""Lateral offsets for metrics that share a value on the same date."""

from collections.abc import Mapping, Sequence
from datetime import date

from coach_trends.domain.series import SeriesPoint, TrendValidationError

DEFAULT_SPACING_UNIT = 6.0

WELLNESS_METRICS = (
    "fatigue",
    "sleep_quality",
    "muscle_soreness",
    "stress_levels",
    "mood",
)


def resolve_offsets(
    values: Mapping[str, float | None],
    metric_order: Sequence[str],
    spacing_unit: float = DEFAULT_SPACING_UNIT,
) -> dict[str, float]:
    """Return an offset per plotted metric for a single date.

    Metrics tied on the same value are spread symmetrically around zero in
    ``metric_order``. Metrics without a value are not plotted and get no entry.
    """
    position = {key: index for index, key in enumerate(metric_order)}
    unknown = [key for key in values if key not in position]
    if unknown:
        raise TrendValidationError(f"Metrics missing from ordering: {unknown}")

    groups: dict[float, list[str]] = {}
    for key, value in values.items():
        if value is None:
            continue
        groups.setdefault(value, []).append(key)

    offsets: dict[str, float] = {}
    for members in groups.values():
        members.sort(key=position.__getitem__)
        centre = (len(members) - 1) / 2
        for index, key in enumerate(members):
            offsets[key] = (index - centre) * spacing_unit
    return offsets


def resolve_series_offsets(
    series_by_metric: Mapping[str, Sequence[SeriesPoint]],
    metric_order: Sequence[str],
    spacing_unit: float = DEFAULT_SPACING_UNIT,
) -> dict[date, dict[str, float]]:
    """Resolve offsets independently for every date across several series."""
    by_date: dict[date, dict[str, float | None]] = {}
    for key, series in series_by_metric.items():
        for point in series:
            if point.is_anchor:
                continue
            by_date.setdefault(point.date, {})[key] = point.value
    return {
        day: resolve_offsets(values, metric_order, spacing_unit)
        for day, values in sorted(by_date.items())
    }
