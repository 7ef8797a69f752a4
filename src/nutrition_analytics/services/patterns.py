"""Weekday, monthly and trend patterns across evaluated days."""

import calendar

from nutrition_analytics.domain.analytics import (
    MACRO_GOAL_TYPES,
    DailyGoalResult,
    PatternAnalysis,
    WeekdayPattern,
)
from nutrition_analytics.services.consistency import DEFAULT_THRESHOLD

WEEKDAYS = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)
MIN_REGRESSION_DAYS = 14
PROBLEM_DAY_SCORE = 60.0
STRONG_DAY_SCORE = 75.0
CONSISTENT_GOAL_RATE = 0.8
CONSISTENT_GOAL_WEEKDAYS = 5


def analyze_patterns(
    days: list[DailyGoalResult], threshold: float = DEFAULT_THRESHOLD
) -> PatternAnalysis:
    """Describe recurring patterns across the days that have data.

    Placeholder days are skipped so gaps in logging do not read as poor days.
    """
    tracked = sorted(
        (result for result in days if result.has_data), key=lambda r: r.day
    )
    by_weekday = _group_by_weekday(tracked)
    weekday_patterns = tuple(
        _weekday_pattern(weekday, results)
        for weekday, results in by_weekday.items()
        if results
    )
    slope = _slope([result.overall_score for result in tracked])

    return PatternAnalysis(
        weekday_patterns=weekday_patterns,
        slope=slope,
        improving=slope > 0,
        monthly_averages=_monthly_averages(tracked),
        problem_days=tuple(
            pattern.weekday
            for pattern in weekday_patterns
            if pattern.average_score < PROBLEM_DAY_SCORE
        ),
        success_factors=_success_factors(weekday_patterns, by_weekday, threshold),
    )


def _group_by_weekday(
    days: list[DailyGoalResult],
) -> dict[str, list[DailyGoalResult]]:
    grouped: dict[str, list[DailyGoalResult]] = {day: [] for day in WEEKDAYS}
    for result in days:
        # date.weekday() counts from Monday.
        grouped[WEEKDAYS[(result.day.weekday() + 1) % 7]].append(result)
    return grouped


def _weekday_pattern(weekday: str, results: list[DailyGoalResult]) -> WeekdayPattern:
    goal_means = {
        goal: sum(getattr(r, goal).percentage for r in results) / len(results)
        for goal in MACRO_GOAL_TYPES
    }
    return WeekdayPattern(
        weekday=weekday,
        days=len(results),
        average_score=sum(r.overall_score for r in results) / len(results),
        best_goal=max(goal_means, key=goal_means.__getitem__),
        worst_goal=min(goal_means, key=goal_means.__getitem__),
    )


def _slope(scores: list[float]) -> float:
    n = len(scores)
    if n < MIN_REGRESSION_DAYS:
        return 0.0
    sum_x = n * (n - 1) / 2
    sum_y = sum(scores)
    sum_xy = sum(index * score for index, score in enumerate(scores))
    sum_xx = sum(index * index for index in range(n))
    return (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)


def _monthly_averages(days: list[DailyGoalResult]) -> tuple[tuple[str, float], ...]:
    scores: dict[str, list[float]] = {}
    for result in days:
        month = calendar.month_name[result.day.month]
        scores.setdefault(month, []).append(result.overall_score)
    return tuple((month, sum(values) / len(values)) for month, values in scores.items())


def _success_factors(
    weekday_patterns: tuple[WeekdayPattern, ...],
    by_weekday: dict[str, list[DailyGoalResult]],
    threshold: float,
) -> tuple[str, ...]:
    factors = []
    if weekday_patterns:
        strongest = max(weekday_patterns, key=lambda pattern: pattern.average_score)
        if strongest.average_score > STRONG_DAY_SCORE:
            factors.append(f"{strongest.weekday}s are your strongest days")

    # Number of weekdays on which each goal was met on most days.
    consistent_weekdays = dict.fromkeys(MACRO_GOAL_TYPES, 0)
    for results in by_weekday.values():
        if not results:
            continue
        for goal in MACRO_GOAL_TYPES:
            met = sum(1 for r in results if getattr(r, goal).percentage >= threshold)
            if met / len(results) > CONSISTENT_GOAL_RATE:
                consistent_weekdays[goal] += 1

    goal = max(consistent_weekdays, key=consistent_weekdays.__getitem__)
    if consistent_weekdays[goal] >= CONSISTENT_GOAL_WEEKDAYS:
        factors.append(f"{goal} is your most consistent goal")
    return tuple(factors)
