"""Period-over-period comparison."""

from nutrition_analytics.domain.analytics import ComparisonResult, DailyGoalResult
from nutrition_analytics.domain.errors import PeriodLengthMismatch, UnsupportedMetric

SUMMED_METRICS = ("calories", "protein", "carbs", "fat")
AVERAGED_METRICS = ("weight", "overall")


def aggregate(days: list[DailyGoalResult], metric: str) -> float:
    """Aggregate one metric over a period.

    Macro metrics are summed. Weight and overall score are averaged over the
    days that carry them, since a sum of either has no meaning.
    """
    if metric in SUMMED_METRICS:
        return sum(getattr(result, metric).actual for result in days)
    if metric == "weight":
        weights = [result.weight.actual for result in days if result.weight]
        return sum(weights) / len(weights) if weights else 0.0
    if metric == "overall":
        scores = [result.overall_score for result in days if result.has_data]
        return sum(scores) / len(scores) if scores else 0.0
    raise UnsupportedMetric(metric)


def compare(
    current: list[DailyGoalResult],
    previous: list[DailyGoalResult],
    metric: str,
    current_label: str = "Current period",
    previous_label: str = "Previous period",
) -> ComparisonResult:
    """Compare a metric between two periods of the same length."""
    if len(current) != len(previous):
        raise PeriodLengthMismatch(len(current), len(previous))

    current_value = aggregate(current, metric)
    previous_value = aggregate(previous, metric)
    delta = current_value - previous_value
    percent_change = delta / previous_value * 100 if previous_value != 0 else None
    return ComparisonResult(
        current_label=current_label,
        previous_label=previous_label,
        metric=metric,
        current_value=current_value,
        previous_value=previous_value,
        delta=delta,
        percent_change=percent_change,
    )
