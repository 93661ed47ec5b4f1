"""Dependency container wiring for the application."""

from dataclasses import dataclass
from zoneinfo import ZoneInfo

from supabase import create_client

from coach_trends.adapters.supabase_measurement_repository import (
    SupabaseMeasurementRepository,
)
from coach_trends.config import Settings, parse_metric_order
from coach_trends.services.cache import InMemoryCache
from coach_trends.services.date_ranges import system_clock
from coach_trends.services.trends import TrendService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    trend_service: TrendService
    wellness_metric_order: tuple[str, ...]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    trend_service = TrendService(
        repository=SupabaseMeasurementRepository(supabase_client),
        cache=InMemoryCache(),
        clock=system_clock,
        timezone=ZoneInfo(resolved_settings.reference_timezone),
        cache_ttl_seconds=resolved_settings.trend_cache_ttl_seconds,
    )

    return AppContainer(
        settings=resolved_settings,
        trend_service=trend_service,
        wellness_metric_order=parse_metric_order(
            resolved_settings.wellness_metric_order
        ),
    )
