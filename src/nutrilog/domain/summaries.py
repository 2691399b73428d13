"""Domain models for per-day nutrition summaries."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class NutritionTotals:
    """Summed nutrition across a set of meals."""

    total_calories: int
    total_protein: float
    total_carbs: float
    total_fats: float
    meals_count: int


@dataclass(frozen=True)
class DailySummary:
    """Cached totals for one user on one calendar day."""

    user_id: UUID
    date: date
    total_calories: int
    total_protein: float
    total_carbs: float
    total_fats: float
    meals_count: int
    calorie_goal: int
