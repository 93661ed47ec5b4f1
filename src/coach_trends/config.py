"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from coach_trends.services.overlap import WELLNESS_METRICS

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    reference_timezone: str = "Asia/Hong_Kong"
    overlap_spacing_unit: float = 6.0
    wellness_metric_order: str | None = None
    trend_cache_ttl_seconds: int = 60
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_metric_order(raw: str | None) -> tuple[str, ...]:
    """Parse the wellness overlay ordering from env, falling back to default."""
    if raw is None:
        return WELLNESS_METRICS
    keys: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip()
        if value and value not in keys:
            keys.append(value)
    return tuple(keys) or WELLNESS_METRICS
