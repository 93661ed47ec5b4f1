"""Tests for grip strength classification."""

import pytest

from coach_trends.services.strength import (
    GripStrengthScore,
    NormalRange,
    classify_grip_strength,
    normal_range,
)


@pytest.mark.parametrize(
    ("value", "sex", "age", "expected"),
    [
        (43.9, "male", 30, GripStrengthScore.WEAK),
        (44, "male", 30, GripStrengthScore.NORMAL),
        (55, "male", 30, GripStrengthScore.NORMAL),
        (55.1, "male", 30, GripStrengthScore.STRONG),
        (35, "male", 45, GripStrengthScore.WEAK),
        (42, "male", 70, GripStrengthScore.NORMAL),
        (36, "female", 25, GripStrengthScore.STRONG),
        (21, "female", 50, GripStrengthScore.WEAK),
        (18, "female", 65, GripStrengthScore.NORMAL),
    ],
)
def test_classify_grip_strength(
    value: float, sex: str, age: int, expected: GripStrengthScore
) -> None:
    assert classify_grip_strength(value, sex, age) is expected


def test_unknown_sex_uses_male_norms() -> None:
    assert normal_range("other", 45) == normal_range("male", 45)
    assert normal_range(None, 45) == NormalRange(36, 50)


@pytest.mark.parametrize("age", [None, 0, 15])
def test_unknown_or_young_age_uses_youngest_bracket(age: int | None) -> None:
    assert normal_range("female", age) == NormalRange(26, 35)


def test_bracket_edges() -> None:
    assert normal_range("male", 39) == NormalRange(44, 55)
    assert normal_range("male", 40) == NormalRange(36, 50)
    assert normal_range("male", 59) == NormalRange(36, 50)
    assert normal_range("male", 60) == NormalRange(30, 42)
