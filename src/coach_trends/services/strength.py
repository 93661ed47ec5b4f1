"""Grip strength classification against age and sex norms."""

from dataclasses import dataclass
from enum import StrEnum


class GripStrengthScore(StrEnum):
    """Grip strength band."""

    WEAK = "weak"
    NORMAL = "normal"
    STRONG = "strong"


@dataclass(frozen=True)
class NormalRange:
    """Inclusive normal band in kilograms."""

    min_kg: float
    max_kg: float


_NORMS: dict[str, dict[str, NormalRange]] = {
    "male": {
        "20-39": NormalRange(44, 55),
        "40-59": NormalRange(36, 50),
        "60+": NormalRange(30, 42),
    },
    "female": {
        "20-39": NormalRange(26, 35),
        "40-59": NormalRange(22, 32),
        "60+": NormalRange(18, 28),
    },
}

_YOUNG_MAX_AGE = 39
_MIDDLE_MAX_AGE = 59


def normal_range(sex: str | None, age: int | None) -> NormalRange:
    """Return the normal band for a client.

    Unknown or other sex uses the male norms; unknown age or anyone under 20
    uses the youngest bracket.
    """
    norms = _NORMS["female" if sex == "female" else "male"]
    if not age or age <= _YOUNG_MAX_AGE:
        return norms["20-39"]
    if age <= _MIDDLE_MAX_AGE:
        return norms["40-59"]
    return norms["60+"]


def classify_grip_strength(
    value_kg: float, sex: str | None, age: int | None
) -> GripStrengthScore:
    """Classify a grip strength reading."""
    band = normal_range(sex, age)
    if value_kg < band.min_kg:
        return GripStrengthScore.WEAK
    if value_kg <= band.max_kg:
        return GripStrengthScore.NORMAL
    return GripStrengthScore.STRONG
