"""Sum and proportionally scale nutrition profiles.

Used when a client reports eating part of a meal (portion percent) or a
number of label servings, and when meal components and an accompanying drink
are combined into one total.
"""

import logging
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from coach_trends.domain.nutrition import (
    NutritionProfile,
    ScaledProfile,
    ScalingRequest,
)
from coach_trends.domain.series import TrendValidationError

WHOLE_MEAL_PERCENT = 100.0

_logger = logging.getLogger(__name__)


def aggregate(
    components: Iterable[NutritionProfile], beverage: NutritionProfile | None = None
) -> NutritionProfile:
    """Sum components field by field, adding the beverage when present."""
    parts = list(components)
    if beverage is not None:
        parts.append(beverage)
    return NutritionProfile(
        calories=sum(p.calories for p in parts),
        protein=sum(p.protein for p in parts),
        fat=sum(p.fat for p in parts),
        carbs=sum(p.carbs for p in parts),
        fibre=sum(p.fibre for p in parts),
    )


def scale(request: ScalingRequest) -> ScaledProfile:
    """Scale the reference profile by consumed / reference quantity.

    A zero reference quantity cannot define a ratio; the reference profile is
    returned unscaled and flagged instead.
    """
    if request.reference_quantity < 0 or request.consumed_quantity < 0:
        raise TrendValidationError(
            "Quantities must not be negative: "
            f"reference={request.reference_quantity} "
            f"consumed={request.consumed_quantity}"
        )
    if request.reference_quantity == 0:
        _logger.warning(
            "Scaling skipped, invalid reference quantity: consumed=%s",
            request.consumed_quantity,
        )
        return ScaledProfile(
            profile=request.reference, multiplier=1.0, invalid_reference=True
        )

    multiplier = request.consumed_quantity / request.reference_quantity
    return ScaledProfile(
        profile=scale_by_multiplier(request.reference, multiplier),
        multiplier=multiplier,
    )


def scale_by_multiplier(
    profile: NutritionProfile, multiplier: float
) -> NutritionProfile:
    """Apply a multiplier field-wise with per-field rounding."""
    if multiplier < 0:
        raise TrendValidationError(f"Multiplier must not be negative: {multiplier}")
    if multiplier == 1:
        return profile
    return NutritionProfile(
        calories=_round(profile.calories * multiplier, "1"),
        protein=_round(profile.protein * multiplier, "0.1"),
        fat=_round(profile.fat * multiplier, "0.1"),
        carbs=_round(profile.carbs * multiplier, "0.1"),
        fibre=_round(profile.fibre * multiplier, "0.1"),
    )


def scale_portion(profile: NutritionProfile, portion_percent: float) -> ScaledProfile:
    """Scale a whole-meal profile to the percentage actually eaten."""
    return scale(
        ScalingRequest(
            reference=profile,
            reference_quantity=WHOLE_MEAL_PERCENT,
            consumed_quantity=portion_percent,
        )
    )


def scale_servings(per_serving: NutritionProfile, servings: float) -> ScaledProfile:
    """Scale a label's per-serving profile by the servings consumed."""
    return scale(
        ScalingRequest(
            reference=per_serving, reference_quantity=1.0, consumed_quantity=servings
        )
    )


def adjust_meal(
    components: Iterable[NutritionProfile],
    beverage: NutritionProfile | None = None,
    portion_percent: float = WHOLE_MEAL_PERCENT,
) -> ScaledProfile:
    """Combine a meal with its drink and scale by the portion eaten."""
    return scale_portion(aggregate(components, beverage), portion_percent)


def _round(value: float, step: str) -> float:
    # Half away from zero, not banker's rounding.
    return float(Decimal(str(value)).quantize(Decimal(step), rounding=ROUND_HALF_UP))
