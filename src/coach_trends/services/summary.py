"""Headline statistics for reconstructed series."""

from coach_trends.domain.series import (
    Polarity,
    ReconstructedSeries,
    SummaryStats,
    TrendDirection,
    TrendValidationError,
)


def summarize(series: ReconstructedSeries) -> SummaryStats:
    """Return baseline, current and delta for the in-range part of a series.

    The baseline is the first actual sample, never a forward-filled value.
    The current value is the last day, carried values included.
    """
    in_range = [point for point in series if not point.is_anchor]
    if not in_range:
        return SummaryStats(baseline=None, current=None, delta=None)

    baseline = next((p.value for p in in_range if p.is_actual), None)
    current = in_range[-1].value
    delta = None
    if baseline is not None and current is not None:
        delta = current - baseline
    return SummaryStats(baseline=baseline, current=current, delta=delta)


def trend_direction(stats: SummaryStats, polarity: Polarity | str) -> TrendDirection:
    """Classify a delta for coloring."""
    if stats.delta is None:
        return TrendDirection.UNKNOWN
    if stats.delta == 0:
        return TrendDirection.UNCHANGED
    went_down = stats.delta < 0
    if parse_polarity(polarity) is Polarity.LOWER_IS_BETTER:
        return TrendDirection.IMPROVING if went_down else TrendDirection.WORSENING
    return TrendDirection.WORSENING if went_down else TrendDirection.IMPROVING


def parse_polarity(raw: Polarity | str) -> Polarity:
    """Parse a polarity hint."""
    if isinstance(raw, Polarity):
        return raw
    try:
        return Polarity(raw)
    except ValueError:
        raise TrendValidationError(f"Unknown polarity: {raw!r}") from None
