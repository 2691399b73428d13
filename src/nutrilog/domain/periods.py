"""Calendar and rounding helpers shared by the reporting services."""

import calendar
import math
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

END_OF_DAY = time(23, 59, 59, 999000)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)


def round_to_tenth(value: float) -> float:
    """Round to one decimal place with halves rounded up."""
    return math.floor(value * 10 + 0.5) / 10


def percent_of(part: float, whole: float) -> int:
    """Return ``part`` as a rounded percentage of ``whole``; 0 when whole is not positive."""
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


def local_day(instant: datetime, tz: ZoneInfo) -> date:
    """Return the calendar date of an instant in the given timezone."""
    if instant.tzinfo is None:
        return instant.date()
    return instant.astimezone(tz).date()


def day_bounds(day: date, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """Return the first and last millisecond of a local calendar day."""
    return (
        datetime.combine(day, time.min, tzinfo=tz),
        datetime.combine(day, END_OF_DAY, tzinfo=tz),
    )


def week_bounds(today: date) -> tuple[date, date]:
    """Return Monday and Sunday of the week containing ``today``."""
    monday = today - timedelta(days=today.weekday())
    return monday, monday + timedelta(days=6)


def month_bounds(today: date) -> tuple[date, date]:
    """Return the first and last day of the month containing ``today``."""
    first = today.replace(day=1)
    return first, today.replace(day=days_in_month(today))


def days_in_month(day: date) -> int:
    return calendar.monthrange(day.year, day.month)[1]


def resolve_zone(name: str | None, default: str = "UTC") -> ZoneInfo:
    """Return the named timezone, or ``default`` when it is unset or unknown."""
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            pass
    return ZoneInfo(default)
