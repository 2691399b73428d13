"""Meal logging service."""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Protocol
from uuid import UUID

from nutrilog.clock import Clock
from nutrilog.domain.errors import InvalidInputError, NotFoundError
from nutrilog.domain.meals import (
    FoodItemInput,
    MealDayTotals,
    MealDraft,
    MealPage,
    MealPatch,
    MealRecord,
    MealType,
    TodaysMeals,
)
from nutrilog.domain.notifications import NotificationType
from nutrilog.domain.periods import day_bounds, local_day, resolve_zone
from nutrilog.domain.vision import FoodAnalysis
from nutrilog.services.images import ImageStorage
from nutrilog.services.notifications import NotificationService
from nutrilog.services.summaries import DailySummaryService
from nutrilog.services.users import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class MealRepository(Protocol):
    """Persistence interface for meals and their food items."""

    def create_meal(
        self, user_id: UUID, draft: MealDraft, timeout_ms: int
    ) -> MealRecord:
        """Insert a meal and its food items in one transaction."""

    def get_meal(self, meal_id: UUID, user_id: UUID) -> MealRecord | None:
        """Return the meal with items when it belongs to the user."""

    def list_meals(  # noqa: PLR0913
        self,
        user_id: UUID,
        start: datetime | None,
        end: datetime | None,
        meal_type: MealType | None,
        offset: int,
        limit: int,
    ) -> tuple[list[MealRecord], int]:
        """Return one page of meals, newest first, and the total match count."""

    def list_meals_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return meals within [start, end], oldest first."""

    def update_meal(
        self, meal_id: UUID, user_id: UUID, patch: MealPatch, timeout_ms: int
    ) -> MealRecord:
        """Apply field changes and replace items in one transaction."""

    def delete_meal(self, meal_id: UUID, user_id: UUID) -> None:
        """Delete a meal; food items cascade."""


@dataclass
class MealService:
    """Service that owns the meal lifecycle and keeps summaries current."""

    repository: MealRepository
    summary_service: DailySummaryService
    notification_service: NotificationService
    image_storage: ImageStorage
    user_repository: UserRepository
    clock: Clock
    transaction_timeout_ms: int = 5000
    default_timezone: str = "UTC"

    async def create_meal(self, user_id: UUID, draft: MealDraft) -> MealRecord:
        """Persist a meal with its items, refresh the day's summary and notify."""
        if draft.meal_date is None:
            draft = replace(draft, meal_date=self.clock.now())
        meal = self.repository.create_meal(
            user_id, draft, self.transaction_timeout_ms
        )
        self.summary_service.recompute_daily_summary(user_id, meal.meal_date)
        await self.notification_service.emit(
            user_id=user_id,
            title="Meal logged",
            body=(
                f"{meal.meal_type.value.capitalize()} added: "
                f"{meal.total_calories} kcal."
            ),
            notification_type=NotificationType.MEAL_LOGGED,
            metadata={
                "mealId": str(meal.id),
                "calories": str(meal.total_calories),
            },
        )
        return meal

    async def quick_log(
        self,
        user_id: UUID,
        meal_type: MealType,
        analysis: FoodAnalysis,
        image_url: str | None = None,
    ) -> MealRecord:
        """Log a meal straight from a successful food analysis."""
        nutrition = analysis.total_nutrition
        if not analysis.success or nutrition is None:
            raise InvalidInputError(
                "Invalid analysis result. Please analyze food first."
            )
        draft = MealDraft(
            meal_type=meal_type,
            description=analysis.meal_description or "Quick logged meal",
            image_url=image_url,
            total_calories=nutrition.calories,
            protein=nutrition.protein,
            carbs=nutrition.carbs,
            fats=nutrition.fats,
            fiber=nutrition.fiber,
            meal_date=self.clock.now(),
            food_items=[
                FoodItemInput(
                    food_name=item.food_name,
                    quantity=item.quantity,
                    unit=item.unit,
                    calories=item.calories,
                    protein=item.protein,
                    carbs=item.carbs,
                    fats=item.fats,
                )
                for item in analysis.food_items
            ],
        )
        return await self.create_meal(user_id, draft)

    def get_meal(self, meal_id: UUID, user_id: UUID) -> MealRecord:
        meal = self.repository.get_meal(meal_id, user_id)
        if meal is None:
            raise NotFoundError("Meal not found")
        return meal

    def list_meals(  # noqa: PLR0913
        self,
        user_id: UUID,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
        start: datetime | None = None,
        end: datetime | None = None,
        meal_type: MealType | None = None,
    ) -> MealPage:
        """Return a page of meal history with clamped paging values."""
        page = max(DEFAULT_PAGE, page)
        limit = min(max(1, limit), MAX_LIMIT)
        meals, total = self.repository.list_meals(
            user_id,
            start=start,
            end=end,
            meal_type=meal_type,
            offset=(page - 1) * limit,
            limit=limit,
        )
        return MealPage(meals=meals, total=total, page=page, limit=limit)

    def todays_meals(self, user_id: UUID) -> TodaysMeals:
        """Return today's meals in the user's timezone with running totals."""
        user = self.user_repository.get_user(user_id)
        tz = resolve_zone(user.timezone if user else None, self.default_timezone)
        today = local_day(self.clock.now(), tz)
        start, end = day_bounds(today, tz)
        meals = self.repository.list_meals_between(user_id, start, end)
        return TodaysMeals(
            date=today,
            meals=meals,
            totals=MealDayTotals(
                total_calories=sum(meal.total_calories or 0 for meal in meals),
                total_protein=sum(meal.protein or 0 for meal in meals),
                total_carbs=sum(meal.carbs or 0 for meal in meals),
                total_fats=sum(meal.fats or 0 for meal in meals),
                total_fiber=sum(meal.fiber or 0 for meal in meals),
            ),
            meals_count=len(meals),
        )

    def update_meal(self, meal_id: UUID, user_id: UUID, patch: MealPatch) -> MealRecord:
        """Update a meal atomically, replacing all items when new ones are given.

        The summary is recomputed for the meal's date before the update, even if
        the patch moves the meal to another day.
        """
        existing = self.get_meal(meal_id, user_id)
        updated = self.repository.update_meal(
            meal_id, user_id, patch, self.transaction_timeout_ms
        )
        self.summary_service.recompute_daily_summary(user_id, existing.meal_date)
        return updated

    def delete_meal(self, meal_id: UUID, user_id: UUID) -> None:
        """Delete a meal, zero its day's totals if needed and drop its image."""
        existing = self.get_meal(meal_id, user_id)
        self.repository.delete_meal(meal_id, user_id)
        self.summary_service.recompute_daily_summary(user_id, existing.meal_date)
        if existing.image_url:
            try:
                self.image_storage.delete(existing.image_url)
            except Exception:
                logger.exception(
                    "Failed to delete meal image", extra={"meal_id": meal_id}
                )
