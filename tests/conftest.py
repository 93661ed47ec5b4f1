"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID
from zoneinfo import ZoneInfo

import pytest

from coach_trends.config import Settings
from coach_trends.containers import AppContainer
from coach_trends.domain.nutrition import MealLogRow
from coach_trends.domain.series import Measurement
from coach_trends.services.cache import InMemoryCache
from coach_trends.services.overlap import WELLNESS_METRICS
from coach_trends.services.trends import MeasurementRepository, TrendService

HONG_KONG = ZoneInfo("Asia/Hong_Kong")


@dataclass
class FixedClock:
    """Clock returning a settable instant."""

    now: datetime

    def __call__(self) -> datetime:
        return self.now


@dataclass
class InMemoryMeasurementRepository(MeasurementRepository):
    """In-memory measurement source for tests."""

    measurements: list[Measurement] = field(default_factory=list)
    meal_logs: list[MealLogRow] = field(default_factory=list)
    calls: list[tuple[UUID, str, datetime]] = field(default_factory=list)

    def list_measurements(
        self, client_id: UUID, metric_key: str, end: datetime
    ) -> list[Measurement]:
        self.calls.append((client_id, metric_key, end))
        return [
            m
            for m in self.measurements
            if m.metric_key == metric_key and m.timestamp < end
        ]

    def list_meal_logs(self, client_id: UUID, end: datetime) -> list[MealLogRow]:
        self.calls.append((client_id, "meal_logs", end))
        return [log for log in self.meal_logs if log.logged_at < end]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        api_token="api-token",
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2026, 1, 22, 4, 0, tzinfo=UTC))


@pytest.fixture
def measurement_repository() -> InMemoryMeasurementRepository:
    return InMemoryMeasurementRepository()


@pytest.fixture
def trend_service(
    measurement_repository: InMemoryMeasurementRepository, clock: FixedClock
) -> TrendService:
    return TrendService(
        repository=measurement_repository,
        cache=InMemoryCache(clock=clock),
        clock=clock,
        timezone=HONG_KONG,
    )


@pytest.fixture
def container(settings: Settings, trend_service: TrendService) -> AppContainer:
    return AppContainer(
        settings=settings,
        trend_service=trend_service,
        wellness_metric_order=WELLNESS_METRICS,
    )
