"""Request models for the HTTP API."""

import re
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from nutrilog.domain.health import ACTIVITY_LEVELS, Gender, Goal
from nutrilog.domain.meals import FoodItemInput, MealType
from nutrilog.domain.notifications import NotificationType
from nutrilog.domain.vision import FoodAnalysis

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
_PASSWORD_RULE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


def _check_activity_level(value: float | None) -> float | None:
    if value is not None and value not in ACTIVITY_LEVELS:
        levels = ", ".join(str(level) for level in ACTIVITY_LEVELS)
        raise ValueError(f"Invalid activity level. Must be one of: {levels}")
    return value


class RegisterRequest(BaseModel):
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=8, max_length=100)
    name: str | None = Field(default=None, min_length=2, max_length=100)

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        if not _PASSWORD_RULE.match(value):
            raise ValueError(
                "Password must contain at least one uppercase letter, "
                "one lowercase letter, and one number"
            )
        return value


class LoginRequest(BaseModel):
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=1)


class OnboardingRequest(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    age: int = Field(ge=13, le=120)
    weight: float = Field(ge=20, le=500)
    height: float = Field(ge=50, le=300)
    gender: Gender
    activity_level: float
    goal: Goal = Goal.MAINTAIN
    timezone: str | None = None

    check_activity_level = field_validator("activity_level")(_check_activity_level)


class ProfileUpdateRequest(BaseModel):
    """Editable profile fields; ``bmi`` and ``daily_calorie_goal`` are derived."""

    name: str | None = Field(default=None, min_length=2, max_length=100)
    age: int | None = Field(default=None, ge=13, le=120)
    weight: float | None = Field(default=None, ge=20, le=500)
    height: float | None = Field(default=None, ge=50, le=300)
    gender: Gender | None = None
    activity_level: float | None = None
    goal: Goal | None = None
    timezone: str | None = None

    check_activity_level = field_validator("activity_level")(_check_activity_level)


class PushTokenRequest(BaseModel):
    token: str = Field(min_length=1)
    is_login: bool = False


class FoodItemRequest(BaseModel):
    food_name: str = Field(min_length=1, max_length=200)
    quantity: float = Field(gt=0)
    unit: str = Field(min_length=1, max_length=50)
    calories: int = Field(ge=0)
    protein: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)
    fats: float | None = Field(default=None, ge=0)

    def to_domain(self) -> FoodItemInput:
        return FoodItemInput(**self.model_dump())


class MealCreateRequest(BaseModel):
    meal_type: MealType
    description: str | None = Field(default=None, max_length=500)
    image_url: str | None = None
    total_calories: int = Field(ge=0)
    protein: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)
    fats: float | None = Field(default=None, ge=0)
    fiber: float | None = Field(default=None, ge=0)
    meal_date: datetime | None = None
    food_items: list[FoodItemRequest] = Field(default_factory=list)


class MealUpdateRequest(BaseModel):
    """Partial meal update; a ``food_items`` list replaces every stored item."""

    meal_type: MealType | None = None
    description: str | None = Field(default=None, max_length=500)
    image_url: str | None = None
    total_calories: int | None = Field(default=None, ge=0)
    protein: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)
    fats: float | None = Field(default=None, ge=0)
    fiber: float | None = Field(default=None, ge=0)
    meal_date: datetime | None = None
    food_items: list[FoodItemRequest] | None = None


class QuickLogRequest(BaseModel):
    meal_type: MealType
    analysis: FoodAnalysis
    image_url: str | None = None


class NotificationCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    body: str = Field(min_length=1, max_length=1000)
    type: NotificationType = NotificationType.MANUAL
