"""Calendar heatmap bucketing."""

from datetime import date, timedelta

from nutrition_analytics.domain.analytics import (
    DailyGoalResult,
    HeatmapCell,
    HeatmapGrid,
    HeatmapSummary,
    MonthMarker,
)

MONTH_LABELS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)
DAYS_PER_WEEK = 7
EXCELLENT_LEVEL = 4
GOOD_LEVEL = 3

# Lower bounds of levels 2..4; level 1 starts at 0.
_LEVEL_FLOORS = (25.0, 50.0, 75.0)


def level_for_score(score: float) -> int:
    """Map an overall score to achievement level 1-4."""
    level = 1
    for floor in _LEVEL_FLOORS:
        if score >= floor:
            level += 1
    return level


def level_for(result: DailyGoalResult | None) -> int:
    """Return the heatmap level for a day, 0 when there is no data."""
    if result is None or not result.has_data:
        return 0
    return level_for_score(result.overall_score)


def build(
    days: list[DailyGoalResult], window_start: date, window_end: date
) -> HeatmapGrid:
    """Lay the window onto a Sunday-to-Saturday week grid."""
    if window_start > window_end:
        raise ValueError("Heatmap window starts after it ends")

    by_day = {result.day: result for result in days}
    # date.weekday() counts from Monday; the grid counts from Sunday.
    calendar_start = window_start - timedelta(days=(window_start.weekday() + 1) % 7)
    calendar_end = window_end + timedelta(days=(5 - window_end.weekday()) % 7)

    weeks: list[tuple[HeatmapCell, ...]] = []
    months = [_month_marker(calendar_start, 0)]
    running_month = (calendar_start.year, calendar_start.month)
    week: list[HeatmapCell] = []

    current = calendar_start
    while current <= calendar_end:
        in_range = window_start <= current <= window_end
        result = by_day.get(current) if in_range else None
        week.append(
            HeatmapCell(
                day=current,
                level=level_for(result),
                value=result.overall_score if result and result.has_data else 0.0,
                has_data=bool(result and result.has_data),
                in_range=in_range,
            )
        )
        if len(week) == 1 and (current.year, current.month) != running_month:
            running_month = (current.year, current.month)
            months.append(_month_marker(current, len(weeks)))
        if len(week) == DAYS_PER_WEEK:
            weeks.append(tuple(week))
            week = []
        current += timedelta(days=1)

    return HeatmapGrid(
        start=window_start,
        end=window_end,
        weeks=tuple(weeks),
        months=tuple(months),
    )


def summarize(grid: HeatmapGrid) -> HeatmapSummary:
    """Summarize level counts over the in-range cells of a grid."""
    cells = [cell for week in grid.weeks for cell in week if cell.in_range]
    with_data = [cell for cell in cells if cell.has_data]
    excellent = sum(1 for cell in with_data if cell.level == EXCELLENT_LEVEL)
    good = sum(1 for cell in with_data if cell.level >= GOOD_LEVEL)
    counted = len(with_data)
    return HeatmapSummary(
        total_days=len(cells),
        days_with_data=counted,
        excellent_days=excellent,
        good_days=good,
        average_score=(
            sum(cell.value for cell in with_data) / counted if counted else 0.0
        ),
        excellent_rate=excellent / counted * 100 if counted else 0.0,
        good_rate=good / counted * 100 if counted else 0.0,
    )


def _month_marker(day: date, week_index: int) -> MonthMarker:
    return MonthMarker(
        name=MONTH_LABELS[day.month - 1],
        month=day.month,
        year=day.year,
        week_index=week_index,
    )
