"""Supabase repository for analytics inputs."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from uuid import UUID
from zoneinfo import ZoneInfo

from supabase import Client

from nutrition_analytics.domain.analytics import RawDayLog, TargetSet
from nutrition_analytics.services.analytics import AnalyticsRepository


@dataclass
class _DayTotals:
    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    has_data: bool = False
    weight: float | None = None


@dataclass
class SupabaseAnalyticsRepository(AnalyticsRepository):
    """Supabase implementation for analytics queries."""

    client: Client

    def list_day_logs(
        self, user_id: UUID, start: date, end: date, timezone_name: str
    ) -> list[RawDayLog]:
        """Return per-day totals bucketed by the user's local calendar day."""
        tz = ZoneInfo(timezone_name)
        range_start = datetime.combine(start, time.min, tzinfo=tz).astimezone(UTC)
        range_end = datetime.combine(
            end + timedelta(days=1), time.min, tzinfo=tz
        ).astimezone(UTC)

        totals: dict[date, _DayTotals] = {}
        for row in self._select_range(
            "food_logs",
            "logged_at, calories_consumed, protein_consumed, "
            "carbs_consumed, fat_consumed",
            "logged_at",
            user_id,
            range_start,
            range_end,
        ):
            day = _local_day(row.get("logged_at"), tz)
            if day is None:
                continue
            entry = totals.setdefault(day, _DayTotals())
            entry.calories += _as_float(row.get("calories_consumed"))
            entry.protein_g += _as_float(row.get("protein_consumed"))
            entry.carbs_g += _as_float(row.get("carbs_consumed"))
            entry.fat_g += _as_float(row.get("fat_consumed"))
            entry.has_data = True

        for row in self._select_range(
            "weight_entries",
            "recorded_at, weight",
            "recorded_at",
            user_id,
            range_start,
            range_end,
        ):
            day = _local_day(row.get("recorded_at"), tz)
            weight = row.get("weight")
            if day is None or weight is None:
                continue
            # Rows arrive in ascending order; the last weigh-in of a day wins.
            totals.setdefault(day, _DayTotals()).weight = float(weight)

        return [
            RawDayLog(
                day=day,
                calories=entry.calories,
                protein_g=entry.protein_g,
                carbs_g=entry.carbs_g,
                fat_g=entry.fat_g,
                weight=entry.weight,
                has_data=entry.has_data,
            )
            for day, entry in sorted(totals.items())
        ]

    def list_target_sets(self, user_id: UUID) -> list[TargetSet]:
        """Return the profile targets as one open-ended target set."""
        response = (
            self.client.table("user_profiles")
            .select(
                "daily_calorie_target, protein_target_g, carb_target_g, "
                "fat_target_g, target_weight"
            )
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return []
        row = response.data[0]
        target_weight = row.get("target_weight")
        return [
            TargetSet(
                calories=_as_float(row.get("daily_calorie_target")),
                protein_g=_as_float(row.get("protein_target_g")),
                carbs_g=_as_float(row.get("carb_target_g")),
                fat_g=_as_float(row.get("fat_target_g")),
                weight=float(target_weight) if target_weight is not None else None,
            )
        ]

    def _select_range(  # noqa: PLR0913
        self,
        table: str,
        columns: str,
        timestamp_column: str,
        user_id: UUID,
        start: datetime,
        end: datetime,
    ) -> list[dict[str, object]]:
        response = (
            self.client.table(table)
            .select(columns)
            .eq("user_id", str(user_id))
            .gte(timestamp_column, start.isoformat())
            .lt(timestamp_column, end.isoformat())
            .order(timestamp_column, desc=False)
            .execute()
        )
        return response.data or []


def _as_float(value: object) -> float:
    if value is None:
        return 0.0
    return float(value)


def _local_day(raw: object, tz: ZoneInfo) -> date | None:
    if not isinstance(raw, str) or not raw:
        return None
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(tz).date()
