"""Supabase repository for client measurements."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from coach_trends.domain.nutrition import MealLogRow, NutritionProfile
from coach_trends.domain.series import Measurement, TrendValidationError
from coach_trends.services.trends import MeasurementRepository


@dataclass(frozen=True)
class MetricSource:
    """Where a metric lives in the database."""

    table: str
    column: str
    timestamp_column: str


METRIC_SOURCES: dict[str, MetricSource] = {
    "weight": MetricSource("body_metrics", "weight", "recorded_at"),
    "hydration": MetricSource("body_metrics", "hydration", "recorded_at"),
    "grip_strength": MetricSource("strength_tests", "value", "tested_at"),
    "fatigue": MetricSource("athlete_monitoring", "fatigue", "submitted_at"),
    "sleep_quality": MetricSource("athlete_monitoring", "sleep_quality", "submitted_at"),
    "muscle_soreness": MetricSource(
        "athlete_monitoring", "muscle_soreness", "submitted_at"
    ),
    "stress_levels": MetricSource("athlete_monitoring", "stress_levels", "submitted_at"),
    "mood": MetricSource("athlete_monitoring", "mood", "submitted_at"),
}

_MEAL_COLUMNS = "logged_at, calories, protein, fat, carbs, fibre, star_rating"


@dataclass
class SupabaseMeasurementRepository(MeasurementRepository):
    """Supabase implementation of the measurement source."""

    client: Client

    def list_measurements(
        self, client_id: UUID, metric_key: str, end: datetime
    ) -> list[Measurement]:
        """Return samples of a metric logged before ``end``."""
        source = METRIC_SOURCES.get(metric_key)
        if source is None:
            raise TrendValidationError(f"Unknown metric: {metric_key!r}")
        response = (
            self.client.table(source.table)
            .select(f"id, {source.timestamp_column}, {source.column}")
            .eq("client_id", str(client_id))
            .lt(source.timestamp_column, end.isoformat())
            .order(source.timestamp_column, desc=False)
            .execute()
        )
        return [
            Measurement(
                metric_key=metric_key,
                timestamp=_parse_timestamp(row.get(source.timestamp_column)),
                value=_optional_float(row.get(source.column)),
                meta={"id": row.get("id")},
            )
            for row in response.data or []
        ]

    def list_meal_logs(self, client_id: UUID, end: datetime) -> list[MealLogRow]:
        """Return meal and drink totals logged before ``end``."""
        rows: list[dict[str, object]] = []
        for table in ("meals", "drinks"):
            response = (
                self.client.table(table)
                .select(_MEAL_COLUMNS)
                .eq("client_id", str(client_id))
                .lt("logged_at", end.isoformat())
                .order("logged_at", desc=False)
                .execute()
            )
            rows.extend(response.data or [])
        return [_parse_meal_row(row) for row in rows]


def _parse_meal_row(row: dict[str, object]) -> MealLogRow:
    star_rating = row.get("star_rating")
    return MealLogRow(
        logged_at=_parse_timestamp(row.get("logged_at")),
        nutrition=NutritionProfile(
            calories=float(row.get("calories") or 0.0),
            protein=float(row.get("protein") or 0.0),
            fat=float(row.get("fat") or 0.0),
            carbs=float(row.get("carbs") or 0.0),
            fibre=float(row.get("fibre") or 0.0),
        ),
        star_rating=int(star_rating) if star_rating is not None else None,
    )


def _parse_timestamp(raw: object) -> datetime:
    if not isinstance(raw, str) or not raw:
        raise TrendValidationError(f"Malformed timestamp: {raw!r}")
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        raise TrendValidationError(f"Malformed timestamp: {raw!r}") from None
    if parsed.tzinfo is None:
        raise TrendValidationError(f"Timestamp without timezone: {raw!r}")
    return parsed


def _optional_float(raw: object) -> float | None:
    if raw is None:
        return None
    return float(raw)  # type: ignore[arg-type]
