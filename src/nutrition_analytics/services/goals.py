"""Daily goal evaluation against the user's targets."""

import logging
from dataclasses import dataclass
from datetime import date

from nutrition_analytics.domain.analytics import (
    DailyGoalResult,
    DateRange,
    MetricAchievement,
    RawDayLog,
    TargetSet,
)
from nutrition_analytics.domain.errors import NoTargetForDate

SCORE_CAP = 150.0

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TargetHistory:
    """Target sets for one user, each valid over a date range."""

    target_sets: tuple[TargetSet, ...]

    def target_for(self, day: date) -> TargetSet:
        """Return the target set covering `day`.

        When ranges overlap, the set with the latest `valid_from` wins.
        """
        candidates = [target for target in self.target_sets if target.covers(day)]
        if not candidates:
            raise NoTargetForDate(day)
        return max(candidates, key=lambda target: target.valid_from)


def metric_percentage(actual: float, target: float) -> float:
    """Return actual as a percentage of target, or 0 for non-positive targets."""
    if target <= 0:
        return 0.0
    return 100 * actual / target


def evaluate(day: RawDayLog, targets: TargetSet | None) -> DailyGoalResult:
    """Evaluate one day's intake against the targets valid that day."""
    calories = _achievement(day.calories, targets.calories if targets else 0.0)
    protein = _achievement(day.protein_g, targets.protein_g if targets else 0.0)
    carbs = _achievement(day.carbs_g, targets.carbs_g if targets else 0.0)
    fat = _achievement(day.fat_g, targets.fat_g if targets else 0.0)

    weight = None
    if day.weight is not None:
        weight_target = targets.weight if targets and targets.weight else 0.0
        weight = _achievement(day.weight, weight_target)

    overall_score = 0.0
    if day.has_data:
        capped = [
            min(max(metric.percentage, 0.0), SCORE_CAP)
            for metric in (calories, protein, carbs, fat)
        ]
        overall_score = sum(capped) / len(capped)

    return DailyGoalResult(
        day=day.day,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        overall_score=overall_score,
        has_data=day.has_data,
        weight=weight,
        target_missing=targets is None,
    )


def evaluate_days(
    logs: list[RawDayLog], history: TargetHistory
) -> list[DailyGoalResult]:
    """Evaluate a sequence of days, degrading missing targets to zero."""
    results = []
    for log in logs:
        try:
            targets: TargetSet | None = history.target_for(log.day)
        except NoTargetForDate as exc:
            _logger.warning("Evaluating without targets: %s", exc.message)
            targets = None
        results.append(evaluate(log, targets))
    return results


def fill_days(logs: list[RawDayLog], window: DateRange) -> list[RawDayLog]:
    """Return one log per window day, adding empty days where none was logged."""
    by_day = {log.day: log for log in logs}
    return [
        by_day.get(day)
        or RawDayLog(
            day=day,
            calories=0.0,
            protein_g=0.0,
            carbs_g=0.0,
            fat_g=0.0,
            has_data=False,
        )
        for day in window.dates()
    ]


def _achievement(actual: float, target: float) -> MetricAchievement:
    resolved_target = max(target, 0.0)
    return MetricAchievement(
        actual=actual,
        target=resolved_target,
        percentage=metric_percentage(actual, resolved_target),
    )
