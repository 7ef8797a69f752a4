"""Error types raised by the analytics engine."""

from datetime import date


class AnalyticsError(Exception):
    """Base class for analytics engine errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidPeriod(AnalyticsError):  # noqa: N818
    """Raised for an unrecognized symbolic period or an inverted custom range."""

    def __init__(self, period: str, reason: str | None = None) -> None:
        self.period = period
        super().__init__(reason or f"Unknown time period '{period}'")


class PeriodLengthMismatch(AnalyticsError):  # noqa: N818
    """Raised when two compared periods cover a different number of days."""

    def __init__(self, current_days: int, previous_days: int) -> None:
        self.current_days = current_days
        self.previous_days = previous_days
        super().__init__(
            f"Cannot compare a {current_days}-day period "
            f"with a {previous_days}-day period"
        )


class NoTargetForDate(AnalyticsError):  # noqa: N818
    """Raised when no target set covers a date."""

    def __init__(self, day: date) -> None:
        self.day = day
        super().__init__(f"No target set covers {day.isoformat()}")


class UnsupportedMetric(AnalyticsError):  # noqa: N818
    """Raised for a goal type or metric the engine does not know."""

    def __init__(self, metric: str) -> None:
        self.metric = metric
        super().__init__(f"Unsupported metric '{metric}'")
