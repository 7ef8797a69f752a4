"""Domain models for historical analytics."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Literal

GoalType = Literal["calories", "protein", "carbs", "fat", "weight", "overall"]
Trend = Literal["improving", "declining", "stable"]

MACRO_GOAL_TYPES: tuple[GoalType, ...] = ("calories", "protein", "carbs", "fat")
GOAL_TYPES: tuple[GoalType, ...] = (*MACRO_GOAL_TYPES, "weight", "overall")


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar window."""

    start: date
    end: date

    @property
    def days(self) -> int:
        """Number of calendar days covered, both ends included."""
        return max((self.end - self.start).days + 1, 0)

    def dates(self) -> list[date]:
        """Return every date in the window in order."""
        return [self.start + timedelta(days=offset) for offset in range(self.days)]


@dataclass(frozen=True)
class PeriodOption:
    """Selectable symbolic period."""

    value: str
    label: str
    days: int


@dataclass(frozen=True)
class RawDayLog:
    """Summed intake and optional weight for one calendar day."""

    day: date
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    weight: float | None = None
    has_data: bool = True


@dataclass(frozen=True)
class TargetSet:
    """Daily targets valid over an inclusive date range."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    weight: float | None = None
    valid_from: date = date.min
    valid_to: date | None = None

    def covers(self, day: date) -> bool:
        """Return True when the day falls inside the validity range."""
        if day < self.valid_from:
            return False
        return self.valid_to is None or day <= self.valid_to


@dataclass(frozen=True)
class MetricAchievement:
    """Actual vs target for one metric on one day."""

    actual: float
    target: float
    percentage: float


@dataclass(frozen=True)
class DailyGoalResult:
    """Goal achievement for one calendar day."""

    day: date
    calories: MetricAchievement
    protein: MetricAchievement
    carbs: MetricAchievement
    fat: MetricAchievement
    overall_score: float
    has_data: bool
    weight: MetricAchievement | None = None
    target_missing: bool = False


@dataclass(frozen=True)
class ConsistencyScore:
    """Consistency of one goal type over a window."""

    goal_type: GoalType
    score: float
    achieved_days: int
    total_days: int
    average_percentage: float
    standard_deviation: float
    trend: Trend


@dataclass(frozen=True)
class StreakRun:
    """A run of consecutive achieved days."""

    start: date
    end: date
    length: int


@dataclass(frozen=True)
class StreakData:
    """Streak history for one goal type."""

    goal_type: GoalType
    current_streak: int
    longest_streak: int
    last_achieved_date: date | None
    history: tuple[StreakRun, ...]


@dataclass(frozen=True)
class HeatmapCell:
    """One calendar slot of the heatmap."""

    day: date
    level: int
    value: float
    has_data: bool
    in_range: bool


@dataclass(frozen=True)
class MonthMarker:
    """Week index at which a calendar month first appears."""

    name: str
    month: int
    year: int
    week_index: int


@dataclass(frozen=True)
class HeatmapGrid:
    """Sunday-aligned week grid covering a window."""

    start: date
    end: date
    weeks: tuple[tuple[HeatmapCell, ...], ...]
    months: tuple[MonthMarker, ...]


@dataclass(frozen=True)
class HeatmapSummary:
    """Level counts for the in-range cells of a heatmap."""

    total_days: int
    days_with_data: int
    excellent_days: int
    good_days: int
    average_score: float
    excellent_rate: float
    good_rate: float


@dataclass(frozen=True)
class ComparisonResult:
    """One metric compared across two equal-length periods."""

    current_label: str
    previous_label: str
    metric: str
    current_value: float
    previous_value: float
    delta: float
    percent_change: float | None


@dataclass(frozen=True)
class AnalyticsSummary:
    """Headline numbers for a window."""

    total_days: int
    days_with_data: int
    average_overall_score: float
    best_day: DailyGoalResult | None
    average_calories: float
    data_completeness: float


@dataclass(frozen=True)
class WeekdayPattern:
    """Average performance on one weekday."""

    weekday: str
    days: int
    average_score: float
    best_goal: GoalType
    worst_goal: GoalType


@dataclass(frozen=True)
class PatternAnalysis:
    """Recurring patterns across the days with data in a window."""

    weekday_patterns: tuple[WeekdayPattern, ...]
    slope: float
    improving: bool
    monthly_averages: tuple[tuple[str, float], ...]
    problem_days: tuple[str, ...]
    success_factors: tuple[str, ...]


@dataclass(frozen=True)
class HistoricalMetrics:
    """Everything the dashboards render for one window."""

    date_range: DateRange
    period: str
    daily_goals: tuple[DailyGoalResult, ...]
    consistency: tuple[ConsistencyScore, ...]
    streaks: tuple[StreakData, ...]
    heatmap: HeatmapGrid
    summary: AnalyticsSummary
    insights: tuple[str, ...]
    patterns: PatternAnalysis
