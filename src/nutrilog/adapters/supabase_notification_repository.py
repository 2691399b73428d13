"""Supabase repository for notifications."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrilog.domain.notifications import NotificationRecord, NotificationType
from nutrilog.services.notifications import NotificationRepository

NOTIFICATION_COLUMNS = "id, user_id, title, body, type, is_read, created_at"


@dataclass
class SupabaseNotificationRepository(NotificationRepository):
    """Supabase implementation for notification persistence."""

    client: Client

    def create_notification(
        self,
        user_id: UUID,
        title: str,
        body: str,
        notification_type: NotificationType,
    ) -> NotificationRecord:
        response = (
            self.client.table("notifications")
            .insert(
                {
                    "user_id": str(user_id),
                    "title": title,
                    "body": body,
                    "type": notification_type.value,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create notification")
        return parse_notification(response.data[0])

    def list_notifications(
        self, user_id: UUID, limit: int, offset: int
    ) -> list[NotificationRecord]:
        response = (
            self.client.table("notifications")
            .select(NOTIFICATION_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        return [parse_notification(row) for row in response.data or []]

    def mark_read(self, notification_id: UUID, user_id: UUID) -> int:
        response = (
            self.client.table("notifications")
            .update({"is_read": True})
            .eq("id", str(notification_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return len(response.data or [])

    def mark_all_read(self, user_id: UUID) -> int:
        response = (
            self.client.table("notifications")
            .update({"is_read": True})
            .eq("user_id", str(user_id))
            .eq("is_read", False)
            .execute()
        )
        return len(response.data or [])

    def delete_notification(self, notification_id: UUID, user_id: UUID) -> int:
        response = (
            self.client.table("notifications")
            .delete()
            .eq("id", str(notification_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return len(response.data or [])

    def get_push_token(self, user_id: UUID) -> str | None:
        response = (
            self.client.table("users")
            .select("push_token")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("push_token")


def parse_notification(row: dict[str, object]) -> NotificationRecord:
    return NotificationRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        title=str(row.get("title", "")),
        body=str(row.get("body", "")),
        type=NotificationType(row.get("type") or NotificationType.SYSTEM),
        is_read=bool(row.get("is_read", False)),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
