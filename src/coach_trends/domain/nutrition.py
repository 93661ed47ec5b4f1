"""Nutrition domain models."""

from dataclasses import dataclass
from datetime import datetime

NUTRIENT_FIELDS = ("calories", "protein", "fat", "carbs", "fibre")


@dataclass(frozen=True)
class NutritionProfile:
    """Nutrition vector for a component, a reference serving or a total."""

    calories: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0
    fibre: float = 0.0


@dataclass(frozen=True)
class ScalingRequest:
    """Scale a reference profile by consumed / reference quantity.

    Both quantities share a unit (grams, ml, or percent of a whole meal).
    """

    reference: NutritionProfile
    reference_quantity: float
    consumed_quantity: float


@dataclass(frozen=True)
class ScaledProfile:
    """Result of a scaling request."""

    profile: NutritionProfile
    multiplier: float
    invalid_reference: bool = False


@dataclass(frozen=True)
class MealLogRow:
    """Logged meal or drink with its nutrition totals.

    ``star_rating`` is produced upstream and carried through unchanged.
    """

    logged_at: datetime
    nutrition: NutritionProfile
    star_rating: int | None = None
