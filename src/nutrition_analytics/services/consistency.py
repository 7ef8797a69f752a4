"""Consistency scoring, trend classification and streaks."""

import math

from nutrition_analytics.domain.analytics import (
    GOAL_TYPES,
    ConsistencyScore,
    DailyGoalResult,
    GoalType,
    StreakData,
    StreakRun,
    Trend,
)
from nutrition_analytics.domain.errors import UnsupportedMetric

DEFAULT_THRESHOLD = 80.0
DEFAULT_TOLERANCE = 5.0
MIN_TREND_DAYS = 4


def goal_percentage(result: DailyGoalResult, goal_type: GoalType) -> float | None:
    """Return the uncapped percentage for a goal type, or None if not tracked."""
    if goal_type == "overall":
        return result.overall_score
    if goal_type == "weight":
        return result.weight.percentage if result.weight else None
    if goal_type in GOAL_TYPES:
        return getattr(result, goal_type).percentage
    raise UnsupportedMetric(goal_type)


def score(
    days: list[DailyGoalResult],
    goal_type: GoalType,
    threshold: float = DEFAULT_THRESHOLD,
    tolerance: float = DEFAULT_TOLERANCE,
) -> ConsistencyScore:
    """Score how consistently a goal type met `threshold` over a window.

    Days without data are left out of the denominator instead of counting
    as misses. The trend compares mean overall scores of the counted days.
    """
    if goal_type not in GOAL_TYPES:
        raise UnsupportedMetric(goal_type)
    counted = _counted_days(days, goal_type)
    percentages = [pct for _, pct in counted]
    total_days = len(counted)
    achieved_days = sum(1 for pct in percentages if pct >= threshold)

    if total_days == 0:
        return ConsistencyScore(
            goal_type=goal_type,
            score=0.0,
            achieved_days=0,
            total_days=0,
            average_percentage=0.0,
            standard_deviation=0.0,
            trend="stable",
        )

    average = sum(percentages) / total_days
    variance = sum((pct - average) ** 2 for pct in percentages) / total_days
    return ConsistencyScore(
        goal_type=goal_type,
        score=achieved_days / total_days * 100,
        achieved_days=achieved_days,
        total_days=total_days,
        average_percentage=average,
        standard_deviation=math.sqrt(variance),
        trend=classify_trend(
            [result.overall_score for result, _ in counted], tolerance
        ),
    )


def classify_trend(scores: list[float], tolerance: float = DEFAULT_TOLERANCE) -> Trend:
    """Compare the mean of the later half of `scores` with the earlier half."""
    if len(scores) < MIN_TREND_DAYS:
        return "stable"
    half = len(scores) // 2
    earlier = scores[:half]
    later = scores[-half:]
    difference = sum(later) / half - sum(earlier) / half
    if difference > tolerance:
        return "improving"
    if difference < -tolerance:
        return "declining"
    return "stable"


def streaks(
    days: list[DailyGoalResult],
    goal_type: GoalType,
    threshold: float = DEFAULT_THRESHOLD,
) -> StreakData:
    """Return streak history for a goal type.

    A day without data, or below the threshold, ends the running streak.
    """
    if goal_type not in GOAL_TYPES:
        raise UnsupportedMetric(goal_type)
    ordered = sorted(days, key=lambda result: result.day)
    history: list[StreakRun] = []
    run: list[DailyGoalResult] = []
    last_achieved = None

    for result in ordered:
        pct = goal_percentage(result, goal_type) if result.has_data else None
        if pct is not None and pct >= threshold:
            run.append(result)
            last_achieved = result.day
            continue
        if run:
            history.append(_close_run(run))
            run = []

    current_streak = 0
    if run:
        history.append(_close_run(run))
        current_streak = len(run)

    return StreakData(
        goal_type=goal_type,
        current_streak=current_streak,
        longest_streak=max((entry.length for entry in history), default=0),
        last_achieved_date=last_achieved,
        history=tuple(history),
    )


def _counted_days(
    days: list[DailyGoalResult], goal_type: GoalType
) -> list[tuple[DailyGoalResult, float]]:
    counted = []
    for result in sorted(days, key=lambda entry: entry.day):
        if not result.has_data:
            continue
        pct = goal_percentage(result, goal_type)
        if pct is None:
            continue
        counted.append((result, pct))
    return counted


def _close_run(run: list[DailyGoalResult]) -> StreakRun:
    return StreakRun(start=run[0].day, end=run[-1].day, length=len(run))

