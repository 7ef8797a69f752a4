"""Historical analytics service combining the engine components."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from nutrition_analytics.domain.analytics import (
    MACRO_GOAL_TYPES,
    AnalyticsSummary,
    ComparisonResult,
    DailyGoalResult,
    DateRange,
    GoalType,
    HeatmapGrid,
    HistoricalMetrics,
    RawDayLog,
    TargetSet,
)
from nutrition_analytics.services import comparison, consistency, goals, heatmap
from nutrition_analytics.services.cache import Cache
from nutrition_analytics.services.insights import generate_insights
from nutrition_analytics.services.patterns import analyze_patterns
from nutrition_analytics.services.periods import PeriodResolver

_logger = logging.getLogger(__name__)


class AnalyticsRepository(Protocol):
    """Data source for raw day logs and target history."""

    def list_day_logs(
        self, user_id: UUID, start: date, end: date, timezone_name: str
    ) -> list[RawDayLog]:
        """Return per-day totals for the inclusive date range."""

    def list_target_sets(self, user_id: UUID) -> list[TargetSet]:
        """Return every target set the user has had."""


def build_metrics(  # noqa: PLR0913
    days: list[DailyGoalResult],
    window: DateRange,
    period: str,
    goal_types: tuple[GoalType, ...] = MACRO_GOAL_TYPES,
    threshold: float = consistency.DEFAULT_THRESHOLD,
    tolerance: float = consistency.DEFAULT_TOLERANCE,
) -> HistoricalMetrics:
    """Assemble every dashboard view for one evaluated window."""
    scores = [
        consistency.score(days, goal_type, threshold=threshold, tolerance=tolerance)
        for goal_type in goal_types
    ]
    streak_data = [
        consistency.streaks(days, goal_type, threshold=threshold)
        for goal_type in goal_types
    ]
    patterns = analyze_patterns(days, threshold=threshold)
    insights = generate_insights(
        streak_data, scores, days, threshold=threshold, patterns=patterns
    )
    return HistoricalMetrics(
        date_range=window,
        period=period,
        daily_goals=tuple(days),
        consistency=tuple(scores),
        streaks=tuple(streak_data),
        heatmap=heatmap.build(days, window.start, window.end),
        summary=summarize_days(days),
        insights=tuple(insights),
        patterns=patterns,
    )


def summarize_days(days: list[DailyGoalResult]) -> AnalyticsSummary:
    """Return headline numbers for a sequence of evaluated days."""
    total_days = len(days)
    with_data = [result for result in days if result.has_data]
    days_with_data = len(with_data)
    best_day = max(days, key=lambda result: result.overall_score, default=None)
    return AnalyticsSummary(
        total_days=total_days,
        days_with_data=days_with_data,
        average_overall_score=(
            sum(result.overall_score for result in days) / total_days
            if total_days
            else 0.0
        ),
        best_day=best_day,
        average_calories=(
            sum(result.calories.actual for result in with_data) / days_with_data
            if days_with_data
            else 0.0
        ),
        data_completeness=days_with_data / total_days * 100 if total_days else 0.0,
    )


@dataclass
class HistoricalAnalyticsService:
    """Service for computing historical analytics per user."""

    repository: AnalyticsRepository
    cache: Cache
    resolver: PeriodResolver = field(default_factory=PeriodResolver)
    threshold: float = consistency.DEFAULT_THRESHOLD
    tolerance: float = consistency.DEFAULT_TOLERANCE
    cache_ttl_seconds: int = 300
    generation_ttl_seconds: int = 7 * 86400

    def today(self, timezone_name: str) -> date:
        """Return the current calendar date in the user's timezone."""
        return datetime.now(tz=ZoneInfo(timezone_name)).date()

    def evaluate_window(
        self, user_id: UUID, window: DateRange, timezone_name: str = "UTC"
    ) -> list[DailyGoalResult]:
        """Fetch and evaluate every day of a window."""
        logs = self.repository.list_day_logs(
            user_id, window.start, window.end, timezone_name
        )
        history = goals.TargetHistory(tuple(self.repository.list_target_sets(user_id)))
        return goals.evaluate_days(goals.fill_days(logs, window), history)

    def get_metrics(
        self,
        user_id: UUID,
        period: str,
        reference_date: date | None = None,
        timezone_name: str = "UTC",
        goal_types: tuple[GoalType, ...] = MACRO_GOAL_TYPES,
    ) -> HistoricalMetrics:
        """Return analytics for a symbolic period ending at `reference_date`."""
        window = self.resolver.resolve(
            period, reference_date or self.today(timezone_name)
        )
        cache_key = self._cache_key(
            user_id, "metrics", period, window.end, timezone_name, ",".join(goal_types)
        )
        cached = self.cache.get(cache_key)
        if isinstance(cached, HistoricalMetrics):
            _logger.debug("Analytics cache hit: %s", cache_key)
            return cached

        days = self.evaluate_window(user_id, window, timezone_name)
        metrics = build_metrics(
            days,
            window,
            period,
            goal_types=goal_types,
            threshold=self.threshold,
            tolerance=self.tolerance,
        )
        self.cache.set(cache_key, metrics, ttl_seconds=self.cache_ttl_seconds)
        _logger.debug("Analytics cache miss: %s", cache_key)
        return metrics

    def get_heatmap(
        self,
        user_id: UUID,
        period: str,
        reference_date: date | None = None,
        timezone_name: str = "UTC",
    ) -> HeatmapGrid:
        """Return the heatmap grid for a symbolic period."""
        return self.get_metrics(
            user_id, period, reference_date, timezone_name
        ).heatmap

    def compare_periods(
        self,
        user_id: UUID,
        period: str,
        metric: str,
        reference_date: date | None = None,
        timezone_name: str = "UTC",
    ) -> ComparisonResult:
        """Compare a period with the equal-length period right before it."""
        current = self.resolver.resolve(
            period, reference_date or self.today(timezone_name)
        )
        previous = self.resolver.previous(current)
        cache_key = self._cache_key(
            user_id, "comparison", period, current.end, timezone_name, metric
        )
        cached = self.cache.get(cache_key)
        if isinstance(cached, ComparisonResult):
            _logger.debug("Analytics cache hit: %s", cache_key)
            return cached

        days = self.evaluate_window(
            user_id, DateRange(start=previous.start, end=current.end), timezone_name
        )
        result = comparison.compare(
            [result for result in days if result.day >= current.start],
            [result for result in days if result.day < current.start],
            metric,
            current_label=self.resolver.label(period),
            previous_label=f"Previous {previous.days} days",
        )
        self.cache.set(cache_key, result, ttl_seconds=self.cache_ttl_seconds)
        return result

    def invalidate(self, user_id: UUID) -> None:
        """Drop every cached result for a user after their logs change."""
        generation = self._generation(user_id)
        self.cache.delete_prefix(f"analytics:{user_id}:{generation}:")
        self.cache.set(
            f"analytics:{user_id}:generation",
            generation + 1,
            ttl_seconds=self.generation_ttl_seconds,
        )
        _logger.info("Analytics cache invalidated: user_id=%s", user_id)

    def _generation(self, user_id: UUID) -> int:
        cached = self.cache.get(f"analytics:{user_id}:generation")
        return cached if isinstance(cached, int) else 0

    def _cache_key(self, user_id: UUID, kind: str, *parts: object) -> str:
        suffix = ":".join(str(part) for part in parts)
        return f"analytics:{user_id}:{self._generation(user_id)}:{kind}:{suffix}"
