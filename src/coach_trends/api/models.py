"""Pydantic request and response models for the HTTP API."""

from datetime import date

from pydantic import BaseModel, Field

from coach_trends.domain.nutrition import NutritionProfile, ScaledProfile
from coach_trends.domain.series import SeriesPoint, SummaryStats
from coach_trends.services.trends import OverlayView, TrendView


class NutritionPayload(BaseModel):
    """Nutrition vector payload."""

    calories: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0
    fibre: float = 0.0

    def to_profile(self) -> NutritionProfile:
        return NutritionProfile(
            calories=self.calories,
            protein=self.protein,
            fat=self.fat,
            carbs=self.carbs,
            fibre=self.fibre,
        )

    @classmethod
    def from_profile(cls, profile: NutritionProfile) -> "NutritionPayload":
        return cls(
            calories=profile.calories,
            protein=profile.protein,
            fat=profile.fat,
            carbs=profile.carbs,
            fibre=profile.fibre,
        )


class ScaleRequestBody(BaseModel):
    """Scale a reference profile by consumed / reference quantity."""

    reference: NutritionPayload
    reference_quantity: float
    consumed_quantity: float


class AggregateRequestBody(BaseModel):
    """Sum meal components and an optional beverage."""

    components: list[NutritionPayload] = Field(default_factory=list)
    beverage: NutritionPayload | None = None


class PortionRequestBody(AggregateRequestBody):
    """Aggregate a meal and scale it to the portion eaten."""

    portion_percent: float = 100.0


class ScaledResponse(BaseModel):
    """Scaled nutrition with the multiplier that produced it."""

    nutrition: NutritionPayload
    multiplier: float
    invalid_reference: bool

    @classmethod
    def from_scaled(cls, scaled: ScaledProfile) -> "ScaledResponse":
        return cls(
            nutrition=NutritionPayload.from_profile(scaled.profile),
            multiplier=scaled.multiplier,
            invalid_reference=scaled.invalid_reference,
        )


class SeriesPointResponse(BaseModel):
    """One day of a reconstructed series."""

    date: date
    value: float | None
    is_actual: bool
    is_anchor: bool = False

    @classmethod
    def from_point(cls, point: SeriesPoint) -> "SeriesPointResponse":
        return cls(
            date=point.date,
            value=point.value,
            is_actual=point.is_actual,
            is_anchor=point.is_anchor,
        )


class SummaryResponse(BaseModel):
    """Baseline, current value and change."""

    baseline: float | None
    current: float | None
    delta: float | None

    @classmethod
    def from_stats(cls, stats: SummaryStats) -> "SummaryResponse":
        return cls(baseline=stats.baseline, current=stats.current, delta=stats.delta)


class TrendResponse(BaseModel):
    """Chart payload for a single metric."""

    metric_key: str
    start: date
    end: date
    mode: str
    points: list[SeriesPointResponse]
    summary: SummaryResponse
    direction: str

    @classmethod
    def from_view(cls, view: TrendView) -> "TrendResponse":
        return cls(
            metric_key=view.metric_key,
            start=view.date_range.start,
            end=view.date_range.end,
            mode=view.mode.value,
            points=[SeriesPointResponse.from_point(p) for p in view.points],
            summary=SummaryResponse.from_stats(view.stats),
            direction=view.direction.value,
        )


class OverlayResponse(BaseModel):
    """Chart payload for several metrics sharing one axis."""

    start: date
    end: date
    series: dict[str, list[SeriesPointResponse]]
    offsets: dict[date, dict[str, float]]

    @classmethod
    def from_view(cls, view: OverlayView) -> "OverlayResponse":
        return cls(
            start=view.date_range.start,
            end=view.date_range.end,
            series={
                key: [SeriesPointResponse.from_point(p) for p in points]
                for key, points in view.series.items()
            },
            offsets=view.offsets,
        )


class GripStrengthResponse(BaseModel):
    """Grip strength band and the normal range it was judged against."""

    score: str
    normal_min_kg: float
    normal_max_kg: float
