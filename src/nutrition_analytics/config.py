"""Application configuration."""

import os
import re

from pydantic_settings import BaseSettings, SettingsConfigDict

from nutrition_analytics.domain.analytics import PeriodOption

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
_PERIOD_VALUE = re.compile(r"^(\d+)d$")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    default_timezone: str = "UTC"
    achievement_threshold: float = 80.0
    trend_tolerance: float = 5.0
    cache_ttl_seconds: int = 300
    analytics_extra_periods: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_extra_periods(raw: str | None) -> list[PeriodOption]:
    """Parse extra periods such as "21d:Last 21 days,60d" from env."""
    if raw is None:
        return []
    options: list[PeriodOption] = []
    for chunk in raw.split(","):
        value, _, label = chunk.strip().partition(":")
        match = _PERIOD_VALUE.match(value.strip())
        if not match:
            continue
        days = int(match.group(1))
        if days <= 0:
            continue
        options.append(
            PeriodOption(
                value=value.strip(),
                label=label.strip() or f"Last {days} days",
                days=days,
            )
        )
    return options
