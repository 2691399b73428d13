"""Domain models for analytics reports."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from nutrilog.domain.summaries import DailySummary


class CalorieStatus(StrEnum):
    """How today's intake compares to the goal."""

    UNDER = "under"
    ON_TRACK = "on_track"
    OVER = "over"


@dataclass(frozen=True)
class Macros:
    protein: float
    carbs: float
    fats: float


@dataclass(frozen=True)
class DailyAnalytics:
    """Intake for one day against the calorie goal."""

    date: date
    calorie_goal: int
    consumed: int
    remaining: int
    percent_consumed: int
    macros: Macros
    meals_count: int
    status: CalorieStatus
    message: str


@dataclass(frozen=True)
class PeriodTotals:
    """Sum of daily summaries over a period."""

    total_calories: int
    total_protein: float
    total_carbs: float
    total_fats: float
    meals_count: int


@dataclass(frozen=True)
class MacroBreakdown:
    """Share of macro calories contributed by each macronutrient."""

    protein_percentage: int
    carbs_percentage: int
    fats_percentage: int


@dataclass(frozen=True)
class WeeklyAnalytics:
    """Monday to Sunday report for the current week."""

    start_date: date
    end_date: date
    daily_calorie_goal: int
    average_calories: int
    totals: PeriodTotals
    days_tracked: int
    daily_breakdown: list[DailySummary]
    weekly_goal: int
    weekly_progress: int
    macro_breakdown: MacroBreakdown


@dataclass(frozen=True)
class WeeklyTrend:
    """One fixed seven-day window within a month."""

    week: int
    total_calories: int
    average_calories: int
    days_tracked: int


@dataclass(frozen=True)
class MonthlyAnalytics:
    """Report for the current calendar month."""

    start_date: date
    end_date: date
    daily_calorie_goal: int
    average_calories: int
    totals: PeriodTotals
    days_tracked: int
    weekly_trends: list[WeeklyTrend]
    consistency_score: int
    days_in_month: int
    average_macros: Macros


@dataclass(frozen=True)
class TodayOverview:
    consumed: int
    goal: int
    remaining: int
    percent_consumed: int
    meals_count: int


@dataclass(frozen=True)
class WeekOverview:
    average_calories: int
    total_meals: int
    days_tracked: int
    weekly_progress: int


@dataclass(frozen=True)
class MonthOverview:
    average_calories: int
    total_meals: int
    days_tracked: int
    consistency_score: int


@dataclass(frozen=True)
class ProgressOverview:
    """Combined daily, weekly and monthly progress."""

    today: TodayOverview
    this_week: WeekOverview
    this_month: MonthOverview
    trends: list[WeeklyTrend]
