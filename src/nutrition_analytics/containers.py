"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutrition_analytics.adapters.supabase_analytics_repository import (
    SupabaseAnalyticsRepository,
)
from nutrition_analytics.config import Settings, parse_extra_periods
from nutrition_analytics.services.analytics import (
    AnalyticsRepository,
    HistoricalAnalyticsService,
)
from nutrition_analytics.services.cache import InMemoryCache
from nutrition_analytics.services.periods import PeriodResolver


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    analytics_service: HistoricalAnalyticsService


def build_analytics_service(
    settings: Settings, repository: AnalyticsRepository
) -> HistoricalAnalyticsService:
    """Create the analytics service configured from settings."""
    return HistoricalAnalyticsService(
        repository=repository,
        cache=InMemoryCache(),
        resolver=PeriodResolver.with_extra(
            parse_extra_periods(settings.analytics_extra_periods)
        ),
        threshold=settings.achievement_threshold,
        tolerance=settings.trend_tolerance,
        cache_ttl_seconds=settings.cache_ttl_seconds,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    repository = SupabaseAnalyticsRepository(supabase_client)
    return AppContainer(
        settings=resolved_settings,
        analytics_service=build_analytics_service(resolved_settings, repository),
    )
