"""Turn meal and drink logs into one nutrient measurement per local day."""

from collections.abc import Iterable
from datetime import date, datetime
from zoneinfo import ZoneInfo

from coach_trends.domain.nutrition import NUTRIENT_FIELDS, MealLogRow, NutritionProfile
from coach_trends.domain.series import Measurement, TrendValidationError
from coach_trends.services.portions import aggregate


def daily_totals(
    logs: Iterable[MealLogRow], tz: ZoneInfo
) -> dict[date, NutritionProfile]:
    """Sum logged nutrition per calendar day in the reference timezone."""
    grouped: dict[date, list[NutritionProfile]] = {}
    for log in logs:
        day = log.logged_at.astimezone(tz).date()
        grouped.setdefault(day, []).append(log.nutrition)
    return {day: aggregate(parts) for day, parts in sorted(grouped.items())}


def daily_nutrient_measurements(
    logs: Iterable[MealLogRow], tz: ZoneInfo, nutrient: str
) -> list[Measurement]:
    """Return one measurement per day for a single nutrient field.

    Each measurement is stamped at the latest log of its day and carries the
    day's star ratings, in logging order, under ``meta["star_ratings"]``.
    """
    if nutrient not in NUTRIENT_FIELDS:
        raise TrendValidationError(f"Unknown nutrient: {nutrient!r}")
    rows = sorted(logs, key=lambda log: log.logged_at)
    last_logged: dict[date, datetime] = {}
    ratings: dict[date, list[int]] = {}
    for log in rows:
        day = log.logged_at.astimezone(tz).date()
        last_logged[day] = log.logged_at
        if log.star_rating is not None:
            ratings.setdefault(day, []).append(log.star_rating)
    return [
        Measurement(
            metric_key=nutrient,
            timestamp=last_logged[day],
            value=getattr(totals, nutrient),
            meta={"star_ratings": tuple(ratings.get(day, ()))},
        )
        for day, totals in daily_totals(rows, tz).items()
    ]
