"""Per-day nutrition summary recomputation."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from nutrilog.domain.meals import MealRecord
from nutrilog.domain.periods import day_bounds, local_day, resolve_zone
from nutrilog.domain.summaries import DailySummary, NutritionTotals
from nutrilog.domain.users import DEFAULT_CALORIE_GOAL
from nutrilog.services.users import UserRepository


class DailySummaryRepository(Protocol):
    """Persistence interface for daily summaries."""

    def recompute_summary(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        start: datetime,
        end: datetime,
        calorie_goal: int,
    ) -> DailySummary:
        """Aggregate meals within [start, end] and upsert the (user_id, day) row.

        The read and the write run as one unit so that concurrent recomputes for
        the same day serialize instead of overwriting each other.
        """

    def get_summary(self, user_id: UUID, day: date) -> DailySummary | None:
        """Return the summary for one day."""

    def list_summaries(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailySummary]:
        """Return summaries with start <= date <= end, oldest first."""


@dataclass
class DailySummaryService:
    """Keeps the cached daily summary in step with a user's meals."""

    repository: DailySummaryRepository
    user_repository: UserRepository
    default_timezone: str = "UTC"

    def recompute_daily_summary(self, user_id: UUID, when: datetime) -> DailySummary:
        """Re-aggregate the meals on the local day of ``when`` and upsert the row.

        The summary is written in a separate call from the meal mutation that
        triggers it, so a crash in between leaves the row stale until the next
        mutation for that day.
        """
        user = self.user_repository.get_user(user_id)
        tz = resolve_zone(user.timezone if user else None, self.default_timezone)
        day = local_day(when, tz)
        start, end = day_bounds(day, tz)
        return self.repository.recompute_summary(
            user_id,
            day,
            start,
            end,
            user.calorie_goal if user else DEFAULT_CALORIE_GOAL,
        )


def aggregate_meals(meals: list[MealRecord]) -> NutritionTotals:
    """Sum calories and macros across meals; missing macros count as zero."""
    calories = 0
    protein = carbs = fats = 0.0
    for meal in meals:
        calories += meal.total_calories or 0
        protein += meal.protein or 0
        carbs += meal.carbs or 0
        fats += meal.fats or 0
    return NutritionTotals(
        total_calories=calories,
        total_protein=protein,
        total_carbs=carbs,
        total_fats=fats,
        meals_count=len(meals),
    )
