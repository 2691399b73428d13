"""Domain models for meal logging."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID


class MealType(StrEnum):
    """Meal slots a user can log against."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class FoodItemInput:
    """Food line entry supplied by a client."""

    food_name: str
    quantity: float
    unit: str
    calories: int
    protein: float | None = None
    carbs: float | None = None
    fats: float | None = None


@dataclass(frozen=True)
class FoodItemRecord:
    """Food line entry stored under a meal."""

    id: UUID
    meal_id: UUID
    food_name: str
    quantity: float
    unit: str
    calories: int
    protein: float | None
    carbs: float | None
    fats: float | None


@dataclass(frozen=True)
class MealDraft:
    """Values for a new meal."""

    meal_type: MealType
    total_calories: int
    description: str | None = None
    image_url: str | None = None
    protein: float | None = None
    carbs: float | None = None
    fats: float | None = None
    fiber: float | None = None
    meal_date: datetime | None = None
    food_items: list[FoodItemInput] = field(default_factory=list)


@dataclass(frozen=True)
class MealPatch:
    """Partial update for a meal.

    ``changes`` holds only the meal columns being set. ``food_items`` of ``None``
    leaves the items untouched; any list, including an empty one, replaces all
    existing items.
    """

    changes: dict[str, object] = field(default_factory=dict)
    food_items: list[FoodItemInput] | None = None


@dataclass(frozen=True)
class MealRecord:
    """Meal row with its food items."""

    id: UUID
    user_id: UUID
    meal_type: MealType
    description: str | None
    image_url: str | None
    total_calories: int
    protein: float | None
    carbs: float | None
    fats: float | None
    fiber: float | None
    meal_date: datetime
    created_at: datetime
    food_items: list[FoodItemRecord] = field(default_factory=list)


@dataclass(frozen=True)
class MealPage:
    """One page of a user's meal history."""

    meals: list[MealRecord]
    total: int
    page: int
    limit: int


@dataclass(frozen=True)
class MealDayTotals:
    """Totals for the meals logged on one day."""

    total_calories: int
    total_protein: float
    total_carbs: float
    total_fats: float
    total_fiber: float


@dataclass(frozen=True)
class TodaysMeals:
    """Meals logged today with their running totals."""

    date: date
    meals: list[MealRecord]
    totals: MealDayTotals
    meals_count: int
