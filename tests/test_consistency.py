"""Tests for consistency scoring, trends and streaks."""

from datetime import date, timedelta

import pytest

from nutrition_analytics.domain.analytics import DailyGoalResult, RawDayLog
from nutrition_analytics.domain.errors import UnsupportedMetric
from nutrition_analytics.services.consistency import classify_trend, score, streaks
from nutrition_analytics.services.goals import TargetHistory, evaluate_days
from tests.conftest import DEFAULT_TARGETS, day_log, empty_log

START = date(2024, 5, 1)
WEIGH_IN_ONLY = dict(calories=0, protein_g=0, carbs_g=0, fat_g=0, has_data=False)


def _evaluate(ratios: list[float | None]) -> list[DailyGoalResult]:
    logs = [
        empty_log(START + timedelta(days=offset))
        if ratio is None
        else day_log(START + timedelta(days=offset), ratio)
        for offset, ratio in enumerate(ratios)
    ]
    return evaluate_days(logs, TargetHistory((DEFAULT_TARGETS,)))


def test_days_without_data_are_excluded_from_denominator() -> None:
    days = _evaluate([1.0, 1.2, None])

    result = score(days, "calories")

    assert result.total_days == 2
    assert result.achieved_days == 2
    assert result.score == 100
    assert result.average_percentage == pytest.approx(110)
    assert result.trend == "stable"


def test_threshold_is_inclusive_and_configurable() -> None:
    days = evaluate_days(
        [
            RawDayLog(
                day=START + timedelta(days=offset),
                calories=0,
                protein_g=protein,
                carbs_g=0,
                fat_g=0,
            )
            for offset, protein in enumerate([120, 118.5, 142.5])
        ]
        + [empty_log(START + timedelta(days=3))],
        TargetHistory((DEFAULT_TARGETS,)),
    )

    default = score(days, "protein")
    strict = score(days, "protein", threshold=90)

    assert default.achieved_days == 2
    assert default.total_days == 3
    assert default.score == pytest.approx(200 / 3)
    assert strict.achieved_days == 1


def test_average_percentage_is_uncapped() -> None:
    days = _evaluate([2.0, 2.0])

    assert score(days, "fat").average_percentage == pytest.approx(200)


def test_zero_counted_days_is_neutral() -> None:
    result = score(_evaluate([None, None]), "calories")

    assert result.score == 0
    assert result.total_days == 0
    assert result.average_percentage == 0
    assert result.trend == "stable"


def test_rising_scores_are_improving() -> None:
    ratios = [(40 + index * 50 / 9) / 100 for index in range(10)]

    result = score(_evaluate(ratios), "calories")

    assert result.trend == "improving"


def test_falling_scores_are_declining() -> None:
    result = score(_evaluate([1.0, 0.95, 0.9, 0.6, 0.55, 0.5]), "overall")

    assert result.trend == "declining"


def test_short_windows_are_stable() -> None:
    assert classify_trend([10, 20, 90]) == "stable"


def test_odd_count_drops_middle_day() -> None:
    # The middle value would tip the comparison if it were counted.
    assert classify_trend([50, 50, 500, 52, 52]) == "stable"
    assert classify_trend([50, 50, 0, 60, 60]) == "improving"


def test_changes_within_tolerance_are_stable() -> None:
    assert classify_trend([70, 70, 75, 75]) == "stable"
    assert classify_trend([70, 70, 75.5, 75.5]) == "improving"
    assert classify_trend([70, 70, 75.5, 75.5], tolerance=10) == "stable"


def test_weigh_in_without_food_logs_is_not_counted() -> None:
    days = evaluate_days(
        [
            day_log(START, 1.0, weight=75),
            day_log(START + timedelta(days=1), 1.0),
            RawDayLog(day=START + timedelta(days=2), weight=90, **WEIGH_IN_ONLY),
        ],
        TargetHistory((DEFAULT_TARGETS,)),
    )

    result = score(days, "weight", threshold=100)

    assert result.total_days == 1
    assert result.achieved_days == 1
    assert score(days, "calories").total_days == 2
    assert score(days, "overall").total_days == 2


def test_weigh_in_only_days_do_not_skew_weight_trend() -> None:
    logs = [
        day_log(START + timedelta(days=offset), 1.0, weight=75) for offset in range(4)
    ] + [
        RawDayLog(day=START + timedelta(days=offset), weight=75, **WEIGH_IN_ONLY)
        for offset in range(4, 8)
    ]

    result = score(evaluate_days(logs, TargetHistory((DEFAULT_TARGETS,))), "weight")

    assert result.total_days == 4
    assert result.average_percentage == pytest.approx(100)
    assert result.trend == "stable"


def test_weigh_in_only_day_breaks_weight_streak() -> None:
    days = evaluate_days(
        [
            day_log(START, 1.0, weight=75),
            RawDayLog(day=START + timedelta(days=1), weight=75, **WEIGH_IN_ONLY),
            day_log(START + timedelta(days=2), 1.0, weight=75),
        ],
        TargetHistory((DEFAULT_TARGETS,)),
    )

    result = streaks(days, "weight", threshold=100)

    assert [run.length for run in result.history] == [1, 1]


def test_unknown_goal_type_raises() -> None:
    with pytest.raises(UnsupportedMetric):
        score([], "sodium")  # type: ignore[arg-type]


def test_streaks_track_runs_and_current_streak() -> None:
    days = _evaluate([1.0, 1.0, 0.5, 1.0, None, 1.0, 1.0, 1.0])

    result = streaks(days, "calories")

    assert [run.length for run in result.history] == [2, 1, 3]
    assert result.longest_streak == 3
    assert result.current_streak == 3
    assert result.last_achieved_date == START + timedelta(days=7)
    assert result.history[0].start == START
    assert result.history[0].end == START + timedelta(days=1)


def test_streak_broken_on_last_day_has_no_current_streak() -> None:
    result = streaks(_evaluate([1.0, 1.0, 0.2]), "carbs")

    assert result.current_streak == 0
    assert result.longest_streak == 2


def test_streaks_without_achievements() -> None:
    result = streaks(_evaluate([None, 0.1]), "fat")

    assert result.history == ()
    assert result.longest_streak == 0
    assert result.last_achieved_date is None
