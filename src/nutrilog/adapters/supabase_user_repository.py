"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrilog.domain.users import UserProfile
from nutrilog.services.users import UserRepository

USER_COLUMNS = (
    "id, email, name, age, weight, height, gender, activity_level, goal, bmi, "
    "daily_calorie_goal, is_onboarded, timezone, push_token, created_at"
)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_user(self, user_id: UUID) -> UserProfile | None:
        """Return the user profile, if present."""
        response = (
            self.client.table("users")
            .select(USER_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_user(response.data[0])

    def create_user(
        self, user_id: UUID, email: str, name: str | None, timezone: str
    ) -> UserProfile:
        """Create a profile row keyed by the auth user id."""
        response = (
            self.client.table("users")
            .insert(
                {
                    "id": str(user_id),
                    "email": email,
                    "name": name,
                    "timezone": timezone,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return parse_user(response.data[0])

    def update_user(self, user_id: UUID, changes: dict[str, object]) -> UserProfile:
        """Apply column changes and return the stored profile."""
        response = (
            self.client.table("users")
            .update(changes)
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user in Supabase")
        return parse_user(response.data[0])

    def count_meals(self, user_id: UUID) -> int:
        response = (
            self.client.table("meals")
            .select("id", count="exact", head=True)
            .eq("user_id", str(user_id))
            .execute()
        )
        return response.count or 0

    def count_tracked_days(self, user_id: UUID) -> int:
        response = (
            self.client.table("daily_summaries")
            .select("id", count="exact", head=True)
            .eq("user_id", str(user_id))
            .execute()
        )
        return response.count or 0

    def assign_push_token(self, user_id: UUID, token: str) -> None:
        """Clear the token from other accounts, then store it on this one."""
        self.client.table("users").update({"push_token": None}).eq(
            "push_token", token
        ).neq("id", str(user_id)).execute()
        self.client.table("users").update({"push_token": token}).eq(
            "id", str(user_id)
        ).execute()

    def list_users_with_push_token(self) -> list[UserProfile]:
        response = (
            self.client.table("users")
            .select(USER_COLUMNS)
            .not_.is_("push_token", "null")
            .execute()
        )
        return [parse_user(row) for row in response.data or []]


def parse_user(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        id=UUID(str(row["id"])),
        email=str(row.get("email") or ""),
        name=row.get("name"),
        age=row.get("age"),
        weight=_optional_float(row.get("weight")),
        height=_optional_float(row.get("height")),
        gender=row.get("gender"),
        activity_level=_optional_float(row.get("activity_level")),
        goal=row.get("goal"),
        bmi=_optional_float(row.get("bmi")),
        daily_calorie_goal=row.get("daily_calorie_goal"),
        is_onboarded=bool(row.get("is_onboarded", False)),
        timezone=str(row.get("timezone") or "UTC"),
        push_token=row.get("push_token"),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
