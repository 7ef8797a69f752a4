"""Tests for the historical analytics service."""

from datetime import date, timedelta
from uuid import uuid4

import pytest

from nutrition_analytics.config import Settings
from nutrition_analytics.containers import build_analytics_service
from nutrition_analytics.domain.analytics import TargetSet
from nutrition_analytics.domain.errors import InvalidPeriod
from nutrition_analytics.services.analytics import (
    HistoricalAnalyticsService,
    summarize_days,
)
from nutrition_analytics.services.cache import InMemoryCache
from nutrition_analytics.services.goals import TargetHistory, evaluate_days
from tests.conftest import (
    DEFAULT_TARGETS,
    InMemoryAnalyticsRepository,
    day_log,
    empty_log,
)

REFERENCE = date(2024, 3, 10)


def _service(repository: InMemoryAnalyticsRepository) -> HistoricalAnalyticsService:
    return HistoricalAnalyticsService(repository=repository, cache=InMemoryCache())


def test_get_metrics_fills_every_day_of_window() -> None:
    repository = InMemoryAnalyticsRepository(
        logs=[day_log(REFERENCE, 1.0), day_log(REFERENCE - timedelta(days=2), 0.5)]
    )

    metrics = _service(repository).get_metrics(uuid4(), "7d", REFERENCE)

    assert metrics.period == "7d"
    assert metrics.date_range.start == date(2024, 3, 4)
    assert [result.day for result in metrics.daily_goals] == (
        metrics.date_range.dates()
    )
    assert metrics.summary.total_days == 7
    assert metrics.summary.days_with_data == 2
    assert metrics.summary.best_day is not None
    assert metrics.summary.best_day.day == REFERENCE
    assert [entry.goal_type for entry in metrics.consistency] == [
        "calories",
        "protein",
        "carbs",
        "fat",
    ]
    assert metrics.streaks[0].current_streak == 1
    assert metrics.insights


def test_get_metrics_is_cached_per_window() -> None:
    repository = InMemoryAnalyticsRepository(logs=[day_log(REFERENCE, 1.0)])
    service = _service(repository)
    user_id = uuid4()

    first = service.get_metrics(user_id, "30d", REFERENCE)
    second = service.get_metrics(user_id, "30d", REFERENCE)
    service.get_metrics(user_id, "7d", REFERENCE)

    assert first is second
    assert len(repository.log_queries) == 2


def test_invalidate_forces_recompute() -> None:
    repository = InMemoryAnalyticsRepository(logs=[day_log(REFERENCE, 0.5)])
    service = _service(repository)
    user_id = uuid4()
    other_user = uuid4()

    before = service.get_metrics(user_id, "7d", REFERENCE)
    service.get_metrics(other_user, "7d", REFERENCE)
    repository.logs.append(day_log(REFERENCE - timedelta(days=1), 1.0))
    service.invalidate(user_id)
    after = service.get_metrics(user_id, "7d", REFERENCE)
    service.get_metrics(other_user, "7d", REFERENCE)

    assert before.summary.days_with_data == 1
    assert after.summary.days_with_data == 2
    assert len(repository.log_queries) == 3


def test_repeated_invalidation_keeps_cache_bounded() -> None:
    cache = InMemoryCache()
    service = HistoricalAnalyticsService(
        repository=InMemoryAnalyticsRepository(logs=[day_log(REFERENCE, 1.0)]),
        cache=cache,
    )
    user_id = uuid4()

    for _ in range(50):
        service.get_metrics(user_id, "7d", REFERENCE)
        service.invalidate(user_id)

    # Only the generation counter survives.
    assert len(cache) == 1
    service.get_metrics(user_id, "7d", REFERENCE)
    assert len(cache) == 2


def test_unknown_period_raises() -> None:
    service = _service(InMemoryAnalyticsRepository())

    with pytest.raises(InvalidPeriod):
        service.get_metrics(uuid4(), "5y", REFERENCE)


def test_timezone_is_passed_to_repository() -> None:
    repository = InMemoryAnalyticsRepository()
    user_id = uuid4()

    _service(repository).get_metrics(user_id, "7d", REFERENCE, "Europe/Berlin")

    assert repository.log_queries == [
        (user_id, date(2024, 3, 4), REFERENCE, "Europe/Berlin")
    ]


def test_get_heatmap_covers_window() -> None:
    repository = InMemoryAnalyticsRepository(logs=[day_log(REFERENCE, 1.0)])

    grid = _service(repository).get_heatmap(uuid4(), "14d", REFERENCE)

    in_range = [cell for week in grid.weeks for cell in week if cell.in_range]
    assert len(in_range) == 14
    assert in_range[-1].day == REFERENCE
    assert in_range[-1].level == 4


def test_compare_periods_uses_previous_window() -> None:
    current = [day_log(REFERENCE - timedelta(days=offset), 1.0) for offset in range(7)]
    previous = [
        day_log(REFERENCE - timedelta(days=offset), 0.5) for offset in range(7, 14)
    ]
    repository = InMemoryAnalyticsRepository(logs=current + previous)

    result = _service(repository).compare_periods(uuid4(), "7d", "calories", REFERENCE)

    assert result.current_label == "Last 7 days"
    assert result.previous_label == "Previous 7 days"
    assert result.current_value == 14000
    assert result.previous_value == 7000
    assert result.percent_change == pytest.approx(100)
    assert repository.log_queries[0][1:3] == (date(2024, 2, 26), REFERENCE)


def test_changed_targets_apply_to_their_own_days() -> None:
    repository = InMemoryAnalyticsRepository(
        logs=[day_log(REFERENCE - timedelta(days=1), 1.0), day_log(REFERENCE, 1.0)],
        target_sets=[
            TargetSet(
                calories=2000,
                protein_g=150,
                carbs_g=250,
                fat_g=70,
                valid_to=REFERENCE - timedelta(days=1),
            ),
            TargetSet(
                calories=4000,
                protein_g=300,
                carbs_g=500,
                fat_g=140,
                valid_from=REFERENCE,
            ),
        ],
    )

    metrics = _service(repository).get_metrics(uuid4(), "7d", REFERENCE)

    scores = [result.overall_score for result in metrics.daily_goals[-2:]]
    assert scores == pytest.approx([100, 50])


def test_settings_configure_thresholds_and_periods() -> None:
    settings = Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        api_token="api-token",
        achievement_threshold=40,
        analytics_extra_periods="21d:Three weeks",
    )
    repository = InMemoryAnalyticsRepository(logs=[day_log(REFERENCE, 0.5)])

    service = build_analytics_service(settings, repository)
    metrics = service.get_metrics(uuid4(), "21d", REFERENCE)

    assert service.resolver.label("21d") == "Three weeks"
    assert metrics.date_range.days == 21
    assert metrics.consistency[0].achieved_days == 1


def test_summarize_days_averages() -> None:
    days = evaluate_days(
        [day_log(REFERENCE, 1.0), empty_log(REFERENCE + timedelta(days=1))],
        TargetHistory((DEFAULT_TARGETS,)),
    )

    summary = summarize_days(days)

    assert summary.average_overall_score == pytest.approx(50)
    assert summary.average_calories == pytest.approx(2000)
    assert summary.data_completeness == pytest.approx(50)


def test_summarize_days_empty() -> None:
    summary = summarize_days([])

    assert summary.total_days == 0
    assert summary.best_day is None
    assert summary.data_completeness == 0
