"""Short textual insights derived from analytics results."""

from nutrition_analytics.domain.analytics import (
    MACRO_GOAL_TYPES,
    ConsistencyScore,
    DailyGoalResult,
    PatternAnalysis,
    StreakData,
)
from nutrition_analytics.services.charts import round_half_up
from nutrition_analytics.services.consistency import DEFAULT_THRESHOLD
from nutrition_analytics.services.patterns import analyze_patterns

EXCELLENT_CONSISTENCY = 80.0
GOOD_DAY_SCORE = 75.0
GREAT_WEEK_RATE = 80.0
HARD_WEEK_RATE = 50.0
STRONG_GOAL_RATE = 80.0
WEAK_GOAL_RATE = 50.0
RECENT_DAYS = 7
DECLINING_SLOPE = -0.5
DEFAULT_LIMIT = 8


def generate_insights(  # noqa: PLR0913
    streaks: list[StreakData],
    consistency: list[ConsistencyScore],
    days: list[DailyGoalResult],
    threshold: float = DEFAULT_THRESHOLD,
    limit: int = DEFAULT_LIMIT,
    patterns: PatternAnalysis | None = None,
) -> list[str]:
    """Return up to `limit` insights, most notable first.

    `patterns` is computed from `days` when not supplied.
    """
    if patterns is None:
        patterns = analyze_patterns(days, threshold)
    insights: list[str] = []

    if streaks:
        best = max(streaks, key=lambda streak: streak.longest_streak)
        if best.longest_streak > 0:
            insights.append(
                f"Your longest streak was {best.longest_streak} days "
                f"for {best.goal_type}!"
            )
        active = [streak for streak in streaks if streak.current_streak > 0]
        if active:
            best_active = max(active, key=lambda streak: streak.current_streak)
            insights.append(
                f"You're currently on a {best_active.current_streak}-day "
                f"{best_active.goal_type} streak!"
            )

    if consistency:
        most_consistent = max(consistency, key=lambda entry: entry.score)
        if most_consistent.score > EXCELLENT_CONSISTENCY:
            insights.append(
                f"Excellent consistency in {most_consistent.goal_type} - "
                f"{round_half_up(most_consistent.score)}% score!"
            )
        improving = [e.goal_type for e in consistency if e.trend == "improving"]
        if improving:
            insights.append(
                f"You're improving in {', '.join(improving)}. Keep it up!"
            )
        declining = [e.goal_type for e in consistency if e.trend == "declining"]
        if declining:
            insights.append(
                f"Consider focusing on {', '.join(declining)} - "
                "showing declining trend"
            )

    recent = sorted(days, key=lambda result: result.day)[-RECENT_DAYS:]
    if recent:
        good_days = sum(1 for r in recent if r.overall_score >= GOOD_DAY_SCORE)
        rate = good_days / len(recent) * 100
        if rate >= GREAT_WEEK_RATE:
            insights.append(
                f"Great week! You hit your goals {round_half_up(rate)}% of the time."
            )
        elif rate < HARD_WEEK_RATE:
            insights.append(
                f"This week was challenging - only {round_half_up(rate)}% goal "
                "achievement. Tomorrow is a fresh start!"
            )

    insights.extend(_pattern_insights(patterns))
    insights.extend(_goal_performance_insights(days, threshold))
    return insights[:limit]


def _pattern_insights(patterns: PatternAnalysis) -> list[str]:
    messages = []
    if patterns.problem_days:
        messages.append(
            f"{' and '.join(patterns.problem_days)} tend to be challenging days "
            "for you"
        )
    messages.extend(patterns.success_factors)
    if patterns.improving:
        messages.append(
            "Your performance is trending upward overall - excellent progress!"
        )
    elif patterns.slope < DECLINING_SLOPE:
        messages.append(
            "Performance has been declining recently - consider reviewing "
            "your approach"
        )
    return messages


def _goal_performance_insights(
    days: list[DailyGoalResult], threshold: float
) -> list[str]:
    performance = []
    for goal in MACRO_GOAL_TYPES:
        tracked = [
            getattr(result, goal)
            for result in days
            if result.has_data and getattr(result, goal).target > 0
        ]
        achieved = sum(1 for metric in tracked if metric.percentage >= threshold)
        rate = achieved / len(tracked) * 100 if tracked else 0.0
        performance.append((goal, rate, len(tracked)))

    if not any(total for _, _, total in performance):
        return []

    messages = []
    strongest = max(performance, key=lambda entry: entry[1])
    weakest = min(performance, key=lambda entry: entry[1])
    if strongest[1] > STRONG_GOAL_RATE:
        messages.append(
            f"{strongest[0]} is your strongest area with "
            f"{round_half_up(strongest[1])}% achievement"
        )
    if weakest[1] < WEAK_GOAL_RATE and weakest[2] > 0:
        messages.append(
            f"{weakest[0]} needs attention - only "
            f"{round_half_up(weakest[1])}% achievement rate"
        )
    return messages
