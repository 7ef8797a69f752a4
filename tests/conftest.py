"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

import pytest

from nutrition_analytics.config import Settings
from nutrition_analytics.containers import AppContainer, build_analytics_service
from nutrition_analytics.domain.analytics import RawDayLog, TargetSet
from nutrition_analytics.services.analytics import AnalyticsRepository

DEFAULT_TARGETS = TargetSet(
    calories=2000, protein_g=150, carbs_g=250, fat_g=70, weight=75
)


def day_log(day: date, ratio: float, weight: float | None = None) -> RawDayLog:
    """Build a log where every macro is at `ratio` of the default targets."""
    return RawDayLog(
        day=day,
        calories=DEFAULT_TARGETS.calories * ratio,
        protein_g=DEFAULT_TARGETS.protein_g * ratio,
        carbs_g=DEFAULT_TARGETS.carbs_g * ratio,
        fat_g=DEFAULT_TARGETS.fat_g * ratio,
        weight=weight,
    )


def empty_log(day: date) -> RawDayLog:
    return RawDayLog(
        day=day, calories=0, protein_g=0, carbs_g=0, fat_g=0, has_data=False
    )


@dataclass
class InMemoryAnalyticsRepository(AnalyticsRepository):
    """In-memory analytics repository for tests."""

    logs: list[RawDayLog] = field(default_factory=list)
    target_sets: list[TargetSet] = field(default_factory=lambda: [DEFAULT_TARGETS])
    log_queries: list[tuple[UUID, date, date, str]] = field(default_factory=list)

    def list_day_logs(
        self, user_id: UUID, start: date, end: date, timezone_name: str
    ) -> list[RawDayLog]:
        self.log_queries.append((user_id, start, end, timezone_name))
        return [log for log in self.logs if start <= log.day <= end]

    def list_target_sets(self, user_id: UUID) -> list[TargetSet]:
        return self.target_sets


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        api_token="api-token",
    )


@pytest.fixture
def analytics_repository() -> InMemoryAnalyticsRepository:
    return InMemoryAnalyticsRepository()


@pytest.fixture
def container(
    settings: Settings, analytics_repository: InMemoryAnalyticsRepository
) -> AppContainer:
    return AppContainer(
        settings=settings,
        analytics_service=build_analytics_service(settings, analytics_repository),
    )
