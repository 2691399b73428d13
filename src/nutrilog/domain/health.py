"""Domain models for body metrics and derived health values."""

from dataclasses import dataclass
from enum import StrEnum


class Gender(StrEnum):
    """Genders supported by the Harris-Benedict equations."""

    MALE = "male"
    FEMALE = "female"


class Goal(StrEnum):
    """Weight goal applied on top of maintenance calories."""

    LOSE = "lose"
    GAIN = "gain"
    MAINTAIN = "maintain"


class BmiCategory(StrEnum):
    """BMI classification bands."""

    UNKNOWN = "Unknown"
    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal weight"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


ACTIVITY_LEVEL_DESCRIPTIONS: dict[float, str] = {
    1.2: "Sedentary (little or no exercise)",
    1.375: "Lightly active (light exercise 1-3 days/week)",
    1.55: "Moderately active (moderate exercise 3-5 days/week)",
    1.725: "Very active (hard exercise 6-7 days/week)",
    1.9: "Extra active (very hard exercise, physical job)",
}

ACTIVITY_LEVELS: tuple[float, ...] = tuple(ACTIVITY_LEVEL_DESCRIPTIONS)


@dataclass(frozen=True)
class HealthMetrics:
    """Derived metrics for a set of body measurements."""

    bmi: float | None
    bmi_category: BmiCategory
    bmr: int | None
    daily_calorie_goal: int | None
