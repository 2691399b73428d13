"""Analytics over cached daily summaries."""

from dataclasses import dataclass
from datetime import date, timedelta
from uuid import UUID
from zoneinfo import ZoneInfo

from nutrilog.clock import Clock
from nutrilog.domain.analytics import (
    CalorieStatus,
    DailyAnalytics,
    MacroBreakdown,
    Macros,
    MonthlyAnalytics,
    MonthOverview,
    PeriodTotals,
    ProgressOverview,
    TodayOverview,
    WeeklyAnalytics,
    WeeklyTrend,
    WeekOverview,
)
from nutrilog.domain.periods import (
    days_in_month,
    local_day,
    month_bounds,
    percent_of,
    resolve_zone,
    round_half_up,
    week_bounds,
)
from nutrilog.domain.summaries import DailySummary
from nutrilog.domain.users import DEFAULT_CALORIE_GOAL
from nutrilog.services.summaries import DailySummaryRepository
from nutrilog.services.users import UserRepository

TREND_WINDOWS = 4
TREND_WINDOW_DAYS = 7
OVERVIEW_MONTH_DAYS = 30
UNDER_RATIO = 0.9
OVER_RATIO = 1.1
PROTEIN_KCAL_PER_GRAM = 4
CARBS_KCAL_PER_GRAM = 4
FATS_KCAL_PER_GRAM = 9


@dataclass
class AnalyticsService:
    """Service for calorie reports by day, week and month."""

    summary_repository: DailySummaryRepository
    user_repository: UserRepository
    clock: Clock
    default_timezone: str = "UTC"

    def daily_analytics(self, user_id: UUID, day: date | None = None) -> DailyAnalytics:
        """Return intake for ``day`` (today by default) against the goal."""
        calorie_goal, tz = self._goal_and_zone(user_id)
        day = day or local_day(self.clock.now(), tz)
        summary = self.summary_repository.get_summary(user_id, day)
        consumed = summary.total_calories if summary else 0
        remaining = calorie_goal - consumed
        status = calorie_status(consumed, calorie_goal)
        return DailyAnalytics(
            date=day,
            calorie_goal=calorie_goal,
            consumed=consumed,
            remaining=remaining,
            percent_consumed=percent_of(consumed, calorie_goal),
            macros=Macros(
                protein=summary.total_protein if summary else 0,
                carbs=summary.total_carbs if summary else 0,
                fats=summary.total_fats if summary else 0,
            ),
            meals_count=summary.meals_count if summary else 0,
            status=status,
            message=status_message(status, remaining),
        )

    def weekly_analytics(self, user_id: UUID) -> WeeklyAnalytics:
        """Return the Monday to Sunday report for the current week."""
        calorie_goal, tz = self._goal_and_zone(user_id)
        start, end = week_bounds(local_day(self.clock.now(), tz))
        summaries = self.summary_repository.list_summaries(user_id, start, end)
        totals = sum_summaries(summaries)
        weekly_goal = calorie_goal * 7
        return WeeklyAnalytics(
            start_date=start,
            end_date=end,
            daily_calorie_goal=calorie_goal,
            average_calories=_average(totals.total_calories, len(summaries)),
            totals=totals,
            days_tracked=len(summaries),
            daily_breakdown=summaries,
            weekly_goal=weekly_goal,
            weekly_progress=percent_of(totals.total_calories, weekly_goal),
            macro_breakdown=macro_breakdown(totals),
        )

    def monthly_analytics(self, user_id: UUID) -> MonthlyAnalytics:
        """Return the current calendar month report with four weekly trends."""
        calorie_goal, tz = self._goal_and_zone(user_id)
        start, end = month_bounds(local_day(self.clock.now(), tz))
        summaries = self.summary_repository.list_summaries(user_id, start, end)
        totals = sum_summaries(summaries)
        tracked = len(summaries)
        month_days = days_in_month(start)
        return MonthlyAnalytics(
            start_date=start,
            end_date=end,
            daily_calorie_goal=calorie_goal,
            average_calories=_average(totals.total_calories, tracked),
            totals=totals,
            days_tracked=tracked,
            weekly_trends=weekly_trends(start, summaries),
            consistency_score=percent_of(tracked, month_days),
            days_in_month=month_days,
            average_macros=Macros(
                protein=_average(totals.total_protein, tracked),
                carbs=_average(totals.total_carbs, tracked),
                fats=_average(totals.total_fats, tracked),
            ),
        )

    def overview(self, user_id: UUID) -> ProgressOverview:
        """Combine today, this week and this month into one progress report.

        The month's consistency score here is measured against a flat 30 days,
        unlike :meth:`monthly_analytics`.
        """
        daily = self.daily_analytics(user_id)
        weekly = self.weekly_analytics(user_id)
        monthly = self.monthly_analytics(user_id)
        return ProgressOverview(
            today=TodayOverview(
                consumed=daily.consumed,
                goal=daily.calorie_goal,
                remaining=daily.remaining,
                percent_consumed=daily.percent_consumed,
                meals_count=daily.meals_count,
            ),
            this_week=WeekOverview(
                average_calories=weekly.average_calories,
                total_meals=weekly.totals.meals_count,
                days_tracked=weekly.days_tracked,
                weekly_progress=weekly.weekly_progress,
            ),
            this_month=MonthOverview(
                average_calories=monthly.average_calories,
                total_meals=monthly.totals.meals_count,
                days_tracked=monthly.days_tracked,
                consistency_score=percent_of(
                    monthly.days_tracked, OVERVIEW_MONTH_DAYS
                ),
            ),
            trends=monthly.weekly_trends,
        )

    def _goal_and_zone(self, user_id: UUID) -> tuple[int, ZoneInfo]:
        user = self.user_repository.get_user(user_id)
        if user is None:
            return DEFAULT_CALORIE_GOAL, resolve_zone(None, self.default_timezone)
        return user.calorie_goal, resolve_zone(user.timezone, self.default_timezone)


def calorie_status(consumed: int, calorie_goal: int) -> CalorieStatus:
    if consumed < calorie_goal * UNDER_RATIO:
        return CalorieStatus.UNDER
    if consumed > calorie_goal * OVER_RATIO:
        return CalorieStatus.OVER
    return CalorieStatus.ON_TRACK


def status_message(status: CalorieStatus, remaining: int) -> str:
    if status is CalorieStatus.UNDER:
        return f"You have {abs(remaining)} calories remaining today."
    if status is CalorieStatus.OVER:
        return f"You are {abs(remaining)} calories over your goal today."
    return "You're right on track with your calorie goal!"


def sum_summaries(summaries: list[DailySummary]) -> PeriodTotals:
    """Add up daily summaries into period totals."""
    return PeriodTotals(
        total_calories=sum(summary.total_calories for summary in summaries),
        total_protein=sum(summary.total_protein for summary in summaries),
        total_carbs=sum(summary.total_carbs for summary in summaries),
        total_fats=sum(summary.total_fats for summary in summaries),
        meals_count=sum(summary.meals_count for summary in summaries),
    )


def macro_breakdown(totals: PeriodTotals) -> MacroBreakdown:
    """Split macro calories into protein, carbs and fats percentages."""
    protein = totals.total_protein * PROTEIN_KCAL_PER_GRAM
    carbs = totals.total_carbs * CARBS_KCAL_PER_GRAM
    fats = totals.total_fats * FATS_KCAL_PER_GRAM
    macro_calories = protein + carbs + fats
    return MacroBreakdown(
        protein_percentage=percent_of(protein, macro_calories),
        carbs_percentage=percent_of(carbs, macro_calories),
        fats_percentage=percent_of(fats, macro_calories),
    )


def weekly_trends(month_start: date, summaries: list[DailySummary]) -> list[WeeklyTrend]:
    """Bucket summaries into four seven-day windows from the first of the month.

    Days after the 28th fall outside every window and are not counted.
    """
    trends = []
    for index in range(TREND_WINDOWS):
        window_start = month_start + timedelta(days=index * TREND_WINDOW_DAYS)
        window_end = window_start + timedelta(days=TREND_WINDOW_DAYS - 1)
        window = [s for s in summaries if window_start <= s.date <= window_end]
        calories = sum(summary.total_calories for summary in window)
        trends.append(
            WeeklyTrend(
                week=index + 1,
                total_calories=calories,
                average_calories=_average(calories, len(window)),
                days_tracked=len(window),
            )
        )
    return trends


def _average(total: float, days: int) -> int:
    if days <= 0:
        return 0
    return round_half_up(total / days)
