"""Domain models for user notifications."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class NotificationType(StrEnum):
    """Event that produced a notification."""

    MEAL_LOGGED = "MEAL_LOGGED"
    REMINDER = "REMINDER"
    LOGIN_GREETING = "LOGIN_GREETING"
    MANUAL = "MANUAL"
    SYSTEM = "SYSTEM"


@dataclass(frozen=True)
class NotificationRecord:
    """Represents a stored notification."""

    id: UUID
    user_id: UUID
    title: str
    body: str
    type: NotificationType
    is_read: bool
    created_at: datetime
