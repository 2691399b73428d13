"""Supabase repository for daily nutrition summaries."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client, PostgrestAPIError

from nutrilog.domain.errors import TransactionFailureError
from nutrilog.domain.summaries import DailySummary
from nutrilog.services.summaries import DailySummaryRepository

SUMMARY_COLUMNS = (
    "user_id, date, total_calories, total_protein, total_carbs, total_fats, "
    "meals_count, calorie_goal"
)


@dataclass
class SupabaseDailySummaryRepository(DailySummaryRepository):
    """Supabase implementation for daily summaries."""

    client: Client
    timeout_ms: int = 5000

    def recompute_summary(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        start: datetime,
        end: datetime,
        calorie_goal: int,
    ) -> DailySummary:
        """Aggregate and upsert through ``recompute_daily_summary`` in one transaction."""
        try:
            response = self.client.rpc(
                "recompute_daily_summary",
                {
                    "p_user_id": str(user_id),
                    "p_day": day.isoformat(),
                    "p_start": start.isoformat(),
                    "p_end": end.isoformat(),
                    "p_goal": calorie_goal,
                    "p_timeout_ms": self.timeout_ms,
                },
            ).execute()
        except PostgrestAPIError as exc:
            raise TransactionFailureError(
                f"Daily summary recompute failed: {exc.message}"
            ) from exc
        if not response.data:
            raise TransactionFailureError("recompute_daily_summary returned no row")
        return parse_summary(response.data)

    def get_summary(self, user_id: UUID, day: date) -> DailySummary | None:
        response = (
            self.client.table("daily_summaries")
            .select(SUMMARY_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_summary(response.data[0])

    def list_summaries(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailySummary]:
        response = (
            self.client.table("daily_summaries")
            .select(SUMMARY_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [parse_summary(row) for row in response.data or []]


def parse_summary(row: dict[str, object]) -> DailySummary:
    return DailySummary(
        user_id=UUID(str(row["user_id"])),
        date=date.fromisoformat(str(row["date"])),
        total_calories=int(row.get("total_calories") or 0),
        total_protein=float(row.get("total_protein") or 0),
        total_carbs=float(row.get("total_carbs") or 0),
        total_fats=float(row.get("total_fats") or 0),
        meals_count=int(row.get("meals_count") or 0),
        calorie_goal=int(row.get("calorie_goal") or 0),
    )
