"""User account, onboarding and profile logic."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrilog.clock import Clock
from nutrilog.domain.errors import (
    AuthenticationError,
    InvalidInputError,
    NotFoundError,
)
from nutrilog.domain.health import Goal
from nutrilog.domain.notifications import NotificationType
from nutrilog.domain.users import AuthSession, OnboardingResult, UserProfile, UserStats
from nutrilog.services.health import calculate_health_metrics
from nutrilog.services.notifications import NotificationService

PROFILE_FIELDS = (
    "name",
    "age",
    "weight",
    "height",
    "gender",
    "activity_level",
    "goal",
    "timezone",
)
METRIC_FIELDS = ("weight", "height", "age", "gender", "activity_level")


class UserRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_user(self, user_id: UUID) -> UserProfile | None:
        """Return a user profile by id."""

    def create_user(
        self, user_id: UUID, email: str, name: str | None, timezone: str
    ) -> UserProfile:
        """Create a profile row for an authenticated user."""

    def update_user(self, user_id: UUID, changes: dict[str, object]) -> UserProfile:
        """Apply column changes and return the updated profile."""

    def count_meals(self, user_id: UUID) -> int:
        """Return how many meals the user has logged."""

    def count_tracked_days(self, user_id: UUID) -> int:
        """Return how many daily summaries exist for the user."""

    def assign_push_token(self, user_id: UUID, token: str) -> None:
        """Move a push token to the user, clearing it from anyone else."""

    def list_users_with_push_token(self) -> list[UserProfile]:
        """Return every user that can receive push notifications."""


class AuthClient(Protocol):
    """Interface for the identity provider."""

    def sign_up(self, email: str, password: str) -> AuthSession:
        """Register credentials and return the new identity."""

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange credentials for an access token."""

    def verify_token(self, access_token: str) -> UUID:
        """Return the user id behind a valid access token."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository
    auth_client: AuthClient
    notification_service: NotificationService
    clock: Clock
    default_timezone: str = "UTC"

    def register(
        self, email: str, password: str, name: str | None = None
    ) -> tuple[UserProfile, AuthSession]:
        """Create credentials and the matching profile row."""
        session = self.auth_client.sign_up(email.lower(), password)
        user = self.repository.create_user(
            session.user_id, session.email, name, self.default_timezone
        )
        return user, session

    def login(self, email: str, password: str) -> tuple[UserProfile, AuthSession]:
        """Authenticate credentials and return the profile with a token."""
        session = self.auth_client.sign_in(email.lower(), password)
        user = self.repository.get_user(session.user_id)
        if user is None:
            user = self.repository.create_user(
                session.user_id, session.email, None, self.default_timezone
            )
        return user, session

    def authenticate(self, access_token: str) -> UserProfile:
        """Resolve a bearer token to a user profile."""
        user_id = self.auth_client.verify_token(access_token)
        user = self.repository.get_user(user_id)
        if user is None:
            raise AuthenticationError("User not found.")
        return user

    def get_profile(self, user_id: UUID) -> UserProfile:
        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def complete_onboarding(
        self, user_id: UUID, data: dict[str, object]
    ) -> OnboardingResult:
        """Store onboarding answers together with the derived health metrics."""
        current = self.get_profile(user_id)
        if current.is_onboarded:
            raise InvalidInputError(
                "User has already completed onboarding. Use profile update instead."
            )
        changes = {key: data[key] for key in PROFILE_FIELDS if key in data}
        metrics = calculate_health_metrics(
            weight=changes.get("weight"),
            height=changes.get("height"),
            age=changes.get("age"),
            gender=changes.get("gender"),
            activity_level=changes.get("activity_level"),
            goal=changes.get("goal") or Goal.MAINTAIN,
        )
        changes.update(
            bmi=metrics.bmi,
            daily_calorie_goal=metrics.daily_calorie_goal,
            is_onboarded=True,
        )
        user = self.repository.update_user(user_id, changes)
        return OnboardingResult(user=user, health_metrics=metrics)

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> UserProfile:
        """Update profile fields and refresh BMI and calorie goal when possible."""
        current = self.get_profile(user_id)
        update = {
            key: value
            for key, value in changes.items()
            if key in PROFILE_FIELDS and value is not None
        }
        merged = {key: update.get(key, getattr(current, key)) for key in PROFILE_FIELDS}
        if all(merged[key] for key in METRIC_FIELDS):
            metrics = calculate_health_metrics(
                weight=merged["weight"],
                height=merged["height"],
                age=merged["age"],
                gender=merged["gender"],
                activity_level=merged["activity_level"],
                goal=merged["goal"] or Goal.MAINTAIN,
            )
            update["bmi"] = metrics.bmi
            update["daily_calorie_goal"] = metrics.daily_calorie_goal
        if not update:
            return current
        return self.repository.update_user(user_id, update)

    def get_stats(self, user_id: UUID) -> UserStats:
        """Return lifetime usage counters."""
        user = self.get_profile(user_id)
        member_for = self.clock.now() - user.created_at
        return UserStats(
            total_meals=self.repository.count_meals(user_id),
            days_tracked=self.repository.count_tracked_days(user_id),
            member_since_days=max(member_for.days, 0),
            daily_calorie_goal=user.daily_calorie_goal,
            current_bmi=user.bmi,
        )

    async def update_push_token(
        self, user_id: UUID, token: str, is_login: bool = False
    ) -> None:
        """Register the device token and greet the user on login."""
        if not token:
            raise InvalidInputError("Push token is required")
        self.repository.assign_push_token(user_id, token)
        if not is_login:
            return
        user = self.get_profile(user_id)
        await self.notification_service.emit(
            user_id=user_id,
            title=f"Welcome back, {user.name or 'there'}!",
            body="Ready to track your calories and crush your goals today?",
            notification_type=NotificationType.LOGIN_GREETING,
        )
