"""Time period resolution for analytics windows."""

from dataclasses import dataclass, field
from datetime import date, timedelta

from nutrition_analytics.domain.analytics import DateRange, PeriodOption
from nutrition_analytics.domain.errors import InvalidPeriod

DEFAULT_PERIODS: tuple[PeriodOption, ...] = (
    PeriodOption(value="7d", label="Last 7 days", days=7),
    PeriodOption(value="14d", label="Last 14 days", days=14),
    PeriodOption(value="30d", label="Last 30 days", days=30),
    PeriodOption(value="90d", label="Last 90 days", days=90),
    PeriodOption(value="6m", label="Last 6 months", days=182),
    PeriodOption(value="1y", label="Last year", days=365),
)


@dataclass
class PeriodResolver:
    """Resolve symbolic periods into inclusive date windows."""

    periods: list[PeriodOption] = field(default_factory=lambda: list(DEFAULT_PERIODS))

    @classmethod
    def with_extra(cls, extra: list[PeriodOption] | None) -> "PeriodResolver":
        """Create a resolver with additional periods appended to the defaults.

        An extra period reusing a default value replaces that default in place.
        """
        periods = list(DEFAULT_PERIODS)
        for option in extra or []:
            values = [existing.value for existing in periods]
            if option.value in values:
                periods[values.index(option.value)] = option
            else:
                periods.append(option)
        return cls(periods=periods)

    def list_periods(self) -> list[PeriodOption]:
        """Return the selectable periods in display order."""
        return list(self.periods)

    def label(self, period: str) -> str:
        """Return the display label for a period."""
        return self._option(period).label

    def resolve(self, period: str, reference_date: date) -> DateRange:
        """Return the window of `period` days ending at `reference_date`."""
        option = self._option(period)
        start = reference_date - timedelta(days=option.days - 1)
        return DateRange(start=start, end=reference_date)

    def custom(self, start: date, end: date) -> DateRange:
        """Validate and return a caller-supplied window."""
        if start > end:
            raise InvalidPeriod(
                "custom",
                reason=f"Custom range starts after it ends ({start} > {end})",
            )
        return DateRange(start=start, end=end)

    def previous(self, window: DateRange) -> DateRange:
        """Return the equal-length window immediately before `window`."""
        end = window.start - timedelta(days=1)
        start = end - timedelta(days=window.days - 1)
        return DateRange(start=start, end=end)

    def _option(self, period: str) -> PeriodOption:
        for option in self.periods:
            if option.value == period:
                return option
        raise InvalidPeriod(period)
