"""Domain models for user accounts."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from nutrilog.domain.health import ACTIVITY_LEVEL_DESCRIPTIONS, HealthMetrics

DEFAULT_CALORIE_GOAL = 2000


@dataclass(frozen=True)
class UserProfile:
    """Represents a user profile stored in the database."""

    id: UUID
    email: str
    name: str | None
    age: int | None
    weight: float | None
    height: float | None
    gender: str | None
    activity_level: float | None
    goal: str | None
    bmi: float | None
    daily_calorie_goal: int | None
    is_onboarded: bool
    timezone: str
    push_token: str | None
    created_at: datetime

    @property
    def calorie_goal(self) -> int:
        """Return the calorie goal, falling back to the default when unset."""
        if self.daily_calorie_goal is None:
            return DEFAULT_CALORIE_GOAL
        return self.daily_calorie_goal

    @property
    def activity_level_description(self) -> str | None:
        if self.activity_level is None:
            return None
        return ACTIVITY_LEVEL_DESCRIPTIONS.get(self.activity_level, "Unknown")


@dataclass(frozen=True)
class AuthSession:
    """Authenticated identity returned by the auth provider."""

    user_id: UUID
    email: str
    access_token: str | None


@dataclass(frozen=True)
class OnboardingResult:
    """Profile after onboarding with the metrics that were derived."""

    user: UserProfile
    health_metrics: HealthMetrics


@dataclass(frozen=True)
class UserStats:
    """Lifetime usage counters for a user."""

    total_meals: int
    days_tracked: int
    member_since_days: int
    daily_calorie_goal: int | None
    current_bmi: float | None
