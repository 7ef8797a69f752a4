"""JSON serialization of analytics results for chart components."""

from nutrition_analytics.domain.analytics import (
    AnalyticsSummary,
    ComparisonResult,
    ConsistencyScore,
    DailyGoalResult,
    HeatmapGrid,
    HeatmapSummary,
    HistoricalMetrics,
    MetricAchievement,
    PatternAnalysis,
    PeriodOption,
    StreakData,
)
from nutrition_analytics.services.charts import (
    goal_achievement_series,
    macro_trend_series,
)
from nutrition_analytics.services.heatmap import summarize


def serialize_period(option: PeriodOption) -> dict[str, object]:
    return {"value": option.value, "label": option.label, "days": option.days}


def serialize_metrics(metrics: HistoricalMetrics) -> dict[str, object]:
    """Serialize the full analytics payload for a window."""
    days = list(metrics.daily_goals)
    return {
        "period": metrics.period,
        "date_range": {
            "start": metrics.date_range.start.isoformat(),
            "end": metrics.date_range.end.isoformat(),
        },
        "daily_goals": [serialize_daily_goal(result) for result in days],
        "consistency": [serialize_consistency(entry) for entry in metrics.consistency],
        "streaks": [serialize_streak(entry) for entry in metrics.streaks],
        "summary": serialize_summary(metrics.summary),
        "insights": list(metrics.insights),
        "patterns": serialize_patterns(metrics.patterns),
        "charts": {
            "goal_achievement": goal_achievement_series(days),
            "macro_trends": macro_trend_series(days),
        },
    }


def serialize_daily_goal(result: DailyGoalResult) -> dict[str, object]:
    return {
        "date": result.day.isoformat(),
        "calories": _serialize_metric(result.calories),
        "protein": _serialize_metric(result.protein),
        "carbs": _serialize_metric(result.carbs),
        "fat": _serialize_metric(result.fat),
        "weight": _serialize_metric(result.weight) if result.weight else None,
        "overall_score": result.overall_score,
        "has_data": result.has_data,
        "target_missing": result.target_missing,
    }


def serialize_consistency(entry: ConsistencyScore) -> dict[str, object]:
    return {
        "goal_type": entry.goal_type,
        "score": entry.score,
        "achieved_days": entry.achieved_days,
        "total_days": entry.total_days,
        "average_percentage": entry.average_percentage,
        "standard_deviation": entry.standard_deviation,
        "trend": entry.trend,
    }


def serialize_streak(entry: StreakData) -> dict[str, object]:
    return {
        "goal_type": entry.goal_type,
        "current_streak": entry.current_streak,
        "longest_streak": entry.longest_streak,
        "last_achieved_date": entry.last_achieved_date.isoformat()
        if entry.last_achieved_date
        else None,
        "history": [
            {
                "start": run.start.isoformat(),
                "end": run.end.isoformat(),
                "length": run.length,
            }
            for run in entry.history
        ],
    }


def serialize_patterns(patterns: PatternAnalysis) -> dict[str, object]:
    return {
        "weekdays": [
            {
                "weekday": pattern.weekday,
                "days": pattern.days,
                "average_score": pattern.average_score,
                "best_goal": pattern.best_goal,
                "worst_goal": pattern.worst_goal,
            }
            for pattern in patterns.weekday_patterns
        ],
        "trend": {"slope": patterns.slope, "improving": patterns.improving},
        "monthly_averages": dict(patterns.monthly_averages),
        "problem_days": list(patterns.problem_days),
        "success_factors": list(patterns.success_factors),
    }


def serialize_summary(summary: AnalyticsSummary) -> dict[str, object]:
    return {
        "total_days": summary.total_days,
        "days_with_data": summary.days_with_data,
        "average_overall_score": summary.average_overall_score,
        "best_day": summary.best_day.day.isoformat() if summary.best_day else None,
        "average_calories": summary.average_calories,
        "data_completeness": summary.data_completeness,
    }


def serialize_heatmap(grid: HeatmapGrid) -> dict[str, object]:
    """Serialize a heatmap grid together with its level summary."""
    return {
        "start": grid.start.isoformat(),
        "end": grid.end.isoformat(),
        "weeks": [
            [
                {
                    "date": cell.day.isoformat(),
                    "level": cell.level,
                    "value": cell.value,
                    "has_data": cell.has_data,
                    "in_range": cell.in_range,
                }
                for cell in week
            ]
            for week in grid.weeks
        ],
        "months": [
            {
                "name": marker.name,
                "month": marker.month,
                "year": marker.year,
                "week_index": marker.week_index,
            }
            for marker in grid.months
        ],
        "summary": _serialize_heatmap_summary(summarize(grid)),
    }


def serialize_comparison(result: ComparisonResult) -> dict[str, object]:
    return {
        "metric": result.metric,
        "current": {"label": result.current_label, "value": result.current_value},
        "previous": {"label": result.previous_label, "value": result.previous_value},
        "delta": result.delta,
        "percent_change": result.percent_change,
    }


def _serialize_metric(metric: MetricAchievement) -> dict[str, float]:
    return {
        "actual": metric.actual,
        "target": metric.target,
        "percentage": metric.percentage,
    }


def _serialize_heatmap_summary(summary: HeatmapSummary) -> dict[str, object]:
    return {
        "total_days": summary.total_days,
        "days_with_data": summary.days_with_data,
        "excellent_days": summary.excellent_days,
        "good_days": summary.good_days,
        "average_score": summary.average_score,
        "excellent_rate": summary.excellent_rate,
        "good_rate": summary.good_rate,
    }
