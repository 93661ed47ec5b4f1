"""FastAPI application factory."""

import logging
from uuid import UUID

from fastapi import Depends, FastAPI, HTTPException, Request

from coach_trends.api.auth import require_api_token
from coach_trends.api.models import (
    AggregateRequestBody,
    GripStrengthResponse,
    NutritionPayload,
    OverlayResponse,
    PortionRequestBody,
    ScaledResponse,
    ScaleRequestBody,
    TrendResponse,
)
from coach_trends.app_logging import configure_logging
from coach_trends.containers import AppContainer
from coach_trends.domain.nutrition import ScalingRequest
from coach_trends.domain.series import TrendValidationError
from coach_trends.services.portions import adjust_meal, aggregate, scale
from coach_trends.services.strength import classify_grip_strength, normal_range


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container
    protected = [Depends(require_api_token)]

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get(
        "/clients/{client_id}/trends/{metric_key}",
        dependencies=protected,
    )
    def client_trend(  # noqa: PLR0913
        client_id: UUID,
        metric_key: str,
        request: Request,
        period: str = "last7",
        mode: str | None = None,
        polarity: str = "higher_is_better",
    ) -> TrendResponse:
        """Return a reconstructed trend for one metric."""
        state_container: AppContainer = request.app.state.container
        try:
            view = state_container.trend_service.get_trend(
                client_id, metric_key, period, mode=mode, polarity=polarity
            )
        except TrendValidationError as exc:
            logger.info("Rejected trend request: %s", exc)
            raise _unprocessable(exc) from exc
        return TrendResponse.from_view(view)

    @app.get("/clients/{client_id}/wellness/overlay", dependencies=protected)
    def wellness_overlay(
        client_id: UUID, request: Request, period: str = "last7"
    ) -> OverlayResponse:
        """Return wellness check-in series with tie-break offsets."""
        state_container: AppContainer = request.app.state.container
        try:
            view = state_container.trend_service.get_overlay(
                client_id,
                period,
                metric_keys=state_container.wellness_metric_order,
                spacing_unit=state_container.settings.overlap_spacing_unit,
            )
        except TrendValidationError as exc:
            logger.info("Rejected overlay request: %s", exc)
            raise _unprocessable(exc) from exc
        return OverlayResponse.from_view(view)

    @app.post("/nutrition/scale", dependencies=protected)
    async def scale_nutrition(body: ScaleRequestBody) -> ScaledResponse:
        """Scale a reference profile to the consumed quantity."""
        try:
            scaled = scale(
                ScalingRequest(
                    reference=body.reference.to_profile(),
                    reference_quantity=body.reference_quantity,
                    consumed_quantity=body.consumed_quantity,
                )
            )
        except TrendValidationError as exc:
            raise _unprocessable(exc) from exc
        return ScaledResponse.from_scaled(scaled)

    @app.post("/nutrition/aggregate", dependencies=protected)
    async def aggregate_nutrition(body: AggregateRequestBody) -> NutritionPayload:
        """Sum meal components and an optional beverage."""
        total = aggregate(
            [component.to_profile() for component in body.components],
            body.beverage.to_profile() if body.beverage else None,
        )
        return NutritionPayload.from_profile(total)

    @app.post("/nutrition/portion", dependencies=protected)
    async def portion_nutrition(body: PortionRequestBody) -> ScaledResponse:
        """Combine a meal with its beverage and scale to the portion eaten."""
        try:
            scaled = adjust_meal(
                [component.to_profile() for component in body.components],
                body.beverage.to_profile() if body.beverage else None,
                body.portion_percent,
            )
        except TrendValidationError as exc:
            raise _unprocessable(exc) from exc
        return ScaledResponse.from_scaled(scaled)

    @app.get("/strength/grip/classify", dependencies=protected)
    async def grip_strength(
        value_kg: float, sex: str | None = None, age: int | None = None
    ) -> GripStrengthResponse:
        """Classify a grip strength reading against age and sex norms."""
        band = normal_range(sex, age)
        return GripStrengthResponse(
            score=classify_grip_strength(value_kg, sex, age).value,
            normal_min_kg=band.min_kg,
            normal_max_kg=band.max_kg,
        )

    return app


def _unprocessable(exc: TrendValidationError) -> HTTPException:
    return HTTPException(status_code=422, detail=str(exc))
