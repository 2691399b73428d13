"""Notification persistence and best-effort push delivery."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrilog.domain.errors import NotFoundError
from nutrilog.domain.notifications import NotificationRecord, NotificationType

logger = logging.getLogger(__name__)


class NotificationRepository(Protocol):
    """Persistence interface for notifications."""

    def create_notification(
        self,
        user_id: UUID,
        title: str,
        body: str,
        notification_type: NotificationType,
    ) -> NotificationRecord:
        """Create a notification row."""

    def list_notifications(
        self, user_id: UUID, limit: int, offset: int
    ) -> list[NotificationRecord]:
        """Return notifications, newest first."""

    def mark_read(self, notification_id: UUID, user_id: UUID) -> int:
        """Flag one notification as read and return the affected row count."""

    def mark_all_read(self, user_id: UUID) -> int:
        """Flag every unread notification as read and return the count."""

    def delete_notification(self, notification_id: UUID, user_id: UUID) -> int:
        """Delete a notification and return the affected row count."""

    def get_push_token(self, user_id: UUID) -> str | None:
        """Return the device token registered for the user."""


class PushClient(Protocol):
    """Interface for the push transport."""

    async def send(
        self, token: str, title: str, body: str, data: dict[str, str]
    ) -> None:
        """Deliver a push message to one device."""


@dataclass
class NotificationService:
    """Service that stores notifications and pushes them to devices."""

    repository: NotificationRepository
    push_client: PushClient

    async def create_and_send(
        self,
        user_id: UUID,
        title: str,
        body: str,
        notification_type: NotificationType = NotificationType.SYSTEM,
        metadata: dict[str, str] | None = None,
    ) -> NotificationRecord:
        """Persist a notification, then attempt push delivery."""
        notification = self.repository.create_notification(
            user_id, title, body, notification_type
        )
        await self.send_push(user_id, title, body, metadata or {})
        return notification

    async def send_push(
        self, user_id: UUID, title: str, body: str, data: dict[str, str]
    ) -> bool:
        """Push to the user's device; return False when nothing was delivered."""
        token = self.repository.get_push_token(user_id)
        if not token:
            logger.info("No push token for user, skipping push", extra={"user_id": user_id})
            return False
        try:
            await self.push_client.send(token, title, body, data)
        except Exception:
            logger.exception("Push delivery failed", extra={"user_id": user_id})
            return False
        return True

    async def emit(
        self,
        user_id: UUID,
        title: str,
        body: str,
        notification_type: NotificationType,
        metadata: dict[str, str] | None = None,
    ) -> NotificationRecord | None:
        """Fire-and-forget variant used by domain events; never raises."""
        try:
            return await self.create_and_send(
                user_id, title, body, notification_type, metadata
            )
        except Exception:
            logger.exception(
                "Failed to emit notification",
                extra={"user_id": user_id, "type": str(notification_type)},
            )
            return None

    def list_notifications(
        self, user_id: UUID, limit: int = 20, offset: int = 0
    ) -> list[NotificationRecord]:
        return self.repository.list_notifications(
            user_id, max(1, min(limit, 100)), max(offset, 0)
        )

    def mark_read(self, notification_id: UUID, user_id: UUID) -> None:
        if not self.repository.mark_read(notification_id, user_id):
            raise NotFoundError("Notification not found")

    def mark_all_read(self, user_id: UUID) -> int:
        return self.repository.mark_all_read(user_id)

    def delete_notification(self, notification_id: UUID, user_id: UUID) -> None:
        if not self.repository.delete_notification(notification_id, user_id):
            raise NotFoundError("Notification not found")
