"""Health metric formulas: BMI, Harris-Benedict BMR and daily calorie goal.

Every function is pure. Missing, non-positive or non-finite inputs produce
``None`` rather than an exception, as does any result too large to round, and
``calculate_health_metrics`` lets each ``None`` flow through independently.
"""

import math

from nutrilog.domain.health import (
    ACTIVITY_LEVELS,
    BmiCategory,
    Gender,
    Goal,
    HealthMetrics,
)
from nutrilog.domain.periods import round_half_up, round_to_tenth

LOSE_ADJUSTMENT = -400
GAIN_ADJUSTMENT = 500


def calculate_bmi(weight: float | None, height: float | None) -> float | None:
    """Return BMI from weight in kg and height in cm, rounded to one decimal."""
    if not _positive(weight) or not _positive(height):
        return None
    height_m = height / 100
    area = height_m * height_m
    if area == 0:
        return None
    bmi = weight / area
    # round_to_tenth scales by ten before flooring
    if not math.isfinite(bmi * 10):
        return None
    return round_to_tenth(bmi)


def bmi_category(bmi: float | None) -> BmiCategory:
    """Classify a BMI value."""
    if not _positive(bmi):
        return BmiCategory.UNKNOWN
    if bmi < 18.5:
        return BmiCategory.UNDERWEIGHT
    if bmi < 25:
        return BmiCategory.NORMAL
    if bmi < 30:
        return BmiCategory.OVERWEIGHT
    return BmiCategory.OBESE


def calculate_bmr(
    weight: float | None,
    height: float | None,
    age: float | None,
    gender: str | None,
) -> int | None:
    """Return resting calories per day using the Harris-Benedict equations."""
    if not (_positive(weight) and _positive(height) and _positive(age)):
        return None
    if not gender:
        return None
    normalized = gender.lower()
    if normalized == Gender.MALE:
        bmr = 66.47 + 13.75 * weight + 5.003 * height - 6.755 * age
    elif normalized == Gender.FEMALE:
        bmr = 655.1 + 9.563 * weight + 1.850 * height - 4.676 * age
    else:
        return None
    if not math.isfinite(bmr):
        return None
    return round_half_up(bmr)


def calculate_daily_calorie_goal(
    bmr: float | None,
    activity_level: float | None,
    goal: str | None = Goal.MAINTAIN,
) -> int | None:
    """Scale BMR by activity level and apply the goal adjustment."""
    if not _positive(bmr) or not _positive(activity_level):
        return None
    calories = bmr * activity_level
    if goal == Goal.LOSE:
        calories += LOSE_ADJUSTMENT
    elif goal == Goal.GAIN:
        calories += GAIN_ADJUSTMENT
    if not math.isfinite(calories):
        return None
    return round_half_up(calories)


def calculate_health_metrics(  # noqa: PLR0913
    weight: float | None,
    height: float | None,
    age: float | None,
    gender: str | None,
    activity_level: float | None,
    goal: str | None = Goal.MAINTAIN,
) -> HealthMetrics:
    """Compute every derived metric for a set of body measurements."""
    bmi = calculate_bmi(weight, height)
    bmr = calculate_bmr(weight, height, age, gender)
    return HealthMetrics(
        bmi=bmi,
        bmi_category=bmi_category(bmi),
        bmr=bmr,
        daily_calorie_goal=calculate_daily_calorie_goal(bmr, activity_level, goal),
    )


def is_valid_activity_level(level: float | None) -> bool:
    """Return True when the level is one of the canonical multipliers."""
    return level in ACTIVITY_LEVELS


def _positive(value: float | None) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    try:
        return math.isfinite(value) and value > 0
    except OverflowError:
        # ints beyond float range
        return False
