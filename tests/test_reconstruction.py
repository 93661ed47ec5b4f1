"""Tests for carry-forward and sparse reconstruction."""

from datetime import UTC, date, datetime

import pytest

from coach_trends.domain.series import (
    DateRange,
    Measurement,
    ReconstructionMode,
    TrendValidationError,
)
from coach_trends.services.date_ranges import resolve_date_range
from coach_trends.services.reconstruction import (
    carry_forward,
    reconstruct,
    sparse,
    without_anchor,
)
from tests.conftest import HONG_KONG

WEEK = DateRange(start=date(2026, 1, 16), end=date(2026, 1, 22))


def _weight(day: int, value: float | None, hour: int = 8, month: int = 1) -> Measurement:
    return Measurement(
        metric_key="weight",
        timestamp=datetime(2026, month, day, hour, 0, tzinfo=HONG_KONG),
        value=value,
    )


def test_carry_forward_fills_days_after_each_sample() -> None:
    series = carry_forward([_weight(20, 69.5), _weight(16, 70.0)], WEEK, HONG_KONG)

    assert [p.value for p in series] == [70.0, 70.0, 70.0, 70.0, 69.5, 69.5, 69.5]
    assert [p.is_actual for p in series] == [
        True,
        False,
        False,
        False,
        True,
        False,
        False,
    ]
    assert [p.date for p in series] == list(WEEK.dates())


def test_carry_forward_seeds_from_last_sample_before_range() -> None:
    samples = [_weight(5, 72.0), _weight(10, 71.0), _weight(18, 70.2)]

    series = carry_forward(samples, WEEK, HONG_KONG)

    assert [p.value for p in series[:3]] == [71.0, 71.0, 70.2]
    assert not series[0].is_actual
    assert series[2].is_actual


def test_carry_forward_never_fabricates_before_first_sample() -> None:
    series = carry_forward([_weight(19, 80.0)], WEEK, HONG_KONG)

    assert [p.value for p in series] == [None, None, None, 80.0, 80.0, 80.0, 80.0]


def test_latest_sample_of_a_day_wins_regardless_of_input_order() -> None:
    samples = [_weight(17, 70.4, hour=20), _weight(17, 70.9, hour=7)]

    series = carry_forward(samples, WEEK, HONG_KONG)

    assert series[1].value == 70.4
    assert series[1].is_actual


def test_days_are_bucketed_in_reference_timezone() -> None:
    # 17:00 UTC on the 16th is 01:00 on the 17th in Hong Kong.
    sample = Measurement(
        metric_key="weight",
        timestamp=datetime(2026, 1, 16, 17, 0, tzinfo=UTC),
        value=68.0,
    )

    series = sparse([sample], WEEK, HONG_KONG)

    assert series[0].value is None
    assert series[1].value == 68.0


def test_sparse_leaves_gaps_and_prepends_anchor() -> None:
    samples = [_weight(16, 70.0), _weight(20, 69.5), _weight(14, 70.5)]

    series = sparse(samples, WEEK, HONG_KONG)

    anchor = series[0]
    assert anchor.is_anchor
    assert anchor.is_actual
    assert anchor.value == 70.5
    assert anchor.date == date(2026, 1, 14)
    assert [p.value for p in series[1:]] == [70.0, None, None, None, 69.5, None, None]
    assert [p.is_actual for p in series[1:]] == [
        True,
        False,
        False,
        False,
        True,
        False,
        False,
    ]


def test_sparse_anchor_uses_only_latest_prior_sample() -> None:
    samples = [_weight(2, 73.0), _weight(12, 71.5, hour=6), _weight(12, 71.2, hour=21)]

    series = sparse(samples, WEEK, HONG_KONG)

    anchors = [p for p in series if p.is_anchor]
    assert len(anchors) == 1
    assert anchors[0].value == 71.2


def test_sparse_without_prior_sample_has_no_anchor() -> None:
    series = sparse([_weight(18, 70.0)], WEEK, HONG_KONG)

    assert not any(p.is_anchor for p in series)
    assert len(series) == WEEK.days


def test_sparse_value_present_only_for_actual_days() -> None:
    samples = [_weight(day, 70.0 - day / 10) for day in (3, 16, 18, 19, 22)]

    series = without_anchor(sparse(samples, WEEK, HONG_KONG))

    assert all((p.value is not None) == p.is_actual for p in series)


def test_samples_after_range_are_ignored() -> None:
    series = carry_forward([_weight(23, 65.0)], WEEK, HONG_KONG)

    assert all(p.value is None for p in series)


def test_samples_without_value_are_not_samples() -> None:
    series = carry_forward([_weight(16, 70.0), _weight(18, None)], WEEK, HONG_KONG)

    assert series[2].value == 70.0
    assert not series[2].is_actual


@pytest.mark.parametrize("selector", ["today", "last7", "last30", "last90", "all"])
@pytest.mark.parametrize("mode", list(ReconstructionMode))
def test_series_length_matches_range(selector: str, mode: ReconstructionMode) -> None:
    date_range = resolve_date_range(selector, datetime(2026, 1, 22, 9), HONG_KONG)
    samples = [_weight(1, 75.0, month=1), _weight(20, 70.0), _weight(10, 71.0, month=1)]

    series = without_anchor(reconstruct(samples, date_range, HONG_KONG, mode))

    assert len(series) == date_range.days
    for previous, current in zip(series, series[1:], strict=False):
        assert (current.date - previous.date).days == 1


def test_empty_input_gives_well_formed_series() -> None:
    series = reconstruct([], WEEK, HONG_KONG, "sparse")

    assert len(series) == WEEK.days
    assert all(p.value is None and not p.is_actual for p in series)


def test_input_list_is_left_untouched() -> None:
    samples = [_weight(20, 69.5), _weight(16, 70.0)]
    snapshot = list(samples)

    carry_forward(samples, WEEK, HONG_KONG)
    sparse(samples, WEEK, HONG_KONG)

    assert samples == snapshot


def test_naive_timestamp_is_rejected() -> None:
    sample = Measurement(
        metric_key="weight", timestamp=datetime(2026, 1, 18, 8), value=70.0
    )

    with pytest.raises(TrendValidationError, match="Malformed timestamp"):
        carry_forward([sample], WEEK, HONG_KONG)


def test_non_datetime_timestamp_is_rejected() -> None:
    sample = Measurement(metric_key="weight", timestamp="2026-01-18", value=70.0)  # type: ignore[arg-type]

    with pytest.raises(TrendValidationError):
        sparse([sample], WEEK, HONG_KONG)


def test_unknown_mode_is_rejected() -> None:
    with pytest.raises(TrendValidationError):
        reconstruct([], WEEK, HONG_KONG, "interpolate")


def test_reconstruction_is_repeatable() -> None:
    samples = [_weight(16, 70.0), _weight(14, 70.5), _weight(20, 69.5)]

    assert sparse(samples, WEEK, HONG_KONG) == sparse(samples, WEEK, HONG_KONG)
    assert carry_forward(samples, WEEK, HONG_KONG) == carry_forward(
        samples, WEEK, HONG_KONG
    )
