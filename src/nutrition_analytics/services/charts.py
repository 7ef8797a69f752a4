"""Chart-ready series built from daily goal results."""

import math

from nutrition_analytics.domain.analytics import DailyGoalResult


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)


def goal_achievement_series(days: list[DailyGoalResult]) -> list[dict[str, object]]:
    """Return per-day rounded goal percentages and the overall score."""
    return [
        {
            "date": result.day.isoformat(),
            "calories": round_half_up(result.calories.percentage),
            "protein": round_half_up(result.protein.percentage),
            "carbs": round_half_up(result.carbs.percentage),
            "fat": round_half_up(result.fat.percentage),
            "overall": round_half_up(result.overall_score),
        }
        for result in days
    ]


def macro_trend_series(days: list[DailyGoalResult]) -> list[dict[str, object]]:
    """Return per-day macro targets next to the logged amounts."""
    return [
        {
            "date": result.day.isoformat(),
            "protein_target": result.protein.target,
            "protein_actual": result.protein.actual,
            "carbs_target": result.carbs.target,
            "carbs_actual": result.carbs.actual,
            "fat_target": result.fat.target,
            "fat_actual": result.fat.actual,
        }
        for result in days
    ]
