"""Scheduled calorie reminders."""

import logging
from dataclasses import dataclass
from enum import StrEnum

from nutrilog.clock import Clock
from nutrilog.domain.notifications import NotificationType
from nutrilog.domain.periods import local_day, resolve_zone
from nutrilog.domain.users import UserProfile
from nutrilog.services.notifications import NotificationService
from nutrilog.services.summaries import DailySummaryRepository
from nutrilog.services.users import UserRepository

logger = logging.getLogger(__name__)


class ReminderSlot(StrEnum):
    """Times of day a reminder goes out."""

    BREAKFAST = "BREAKFAST"
    LUNCH = "LUNCH"
    SNACKS = "SNACKS"
    DINNER = "DINNER"


# (hour, minute) in the scheduler's timezone
SLOT_TIMES: dict[ReminderSlot, tuple[int, int]] = {
    ReminderSlot.BREAKFAST: (9, 30),
    ReminderSlot.LUNCH: (13, 30),
    ReminderSlot.SNACKS: (17, 30),
    ReminderSlot.DINNER: (21, 30),
}


def reminder_message(
    slot: ReminderSlot, consumed: int, goal: int, remaining: int
) -> tuple[str, str]:
    """Return the title and body for a slot."""
    if slot is ReminderSlot.BREAKFAST:
        return (
            "Good Morning! ☀️",
            f"Today's goal is {goal} kcal. Don't forget to log your breakfast!",
        )
    if slot is ReminderSlot.LUNCH:
        return (
            "Lunch Time! 🍱",
            f"You have consumed {consumed} kcal so far. "
            f"You have {remaining} kcal remaining for today.",
        )
    if slot is ReminderSlot.SNACKS:
        return (
            "Healthy Snack? 🍎",
            f"Current status: {consumed}/{goal} kcal. "
            f"{remaining} kcal left for your evening.",
        )
    if goal > consumed:
        body = (
            f"Day almost over! You still have {remaining} kcal left. "
            "Log your last meal."
        )
    else:
        body = f"Great job! You reached your daily goal of {goal} kcal."
    return "Evening Wrap-up 🌙", body


@dataclass
class ReminderService:
    """Sends calorie status reminders to every user with a device."""

    user_repository: UserRepository
    summary_repository: DailySummaryRepository
    notification_service: NotificationService
    clock: Clock
    default_timezone: str = "UTC"

    async def send_calorie_reminders(self, slot: ReminderSlot) -> int:
        """Send one reminder per user and return how many were sent."""
        users = self.user_repository.list_users_with_push_token()
        logger.info(
            "Sending calorie reminders",
            extra={"slot": slot.value, "users": len(users)},
        )
        sent = 0
        for user in users:
            try:
                await self._remind(user, slot)
            except Exception:
                logger.exception(
                    "Failed to send reminder",
                    extra={"user_id": user.id, "slot": slot.value},
                )
                continue
            sent += 1
        return sent

    async def _remind(self, user: UserProfile, slot: ReminderSlot) -> None:
        tz = resolve_zone(user.timezone, self.default_timezone)
        summary = self.summary_repository.get_summary(
            user.id, local_day(self.clock.now(), tz)
        )
        consumed = summary.total_calories if summary else 0
        goal = user.calorie_goal
        remaining = max(0, goal - consumed)
        title, body = reminder_message(slot, consumed, goal, remaining)
        await self.notification_service.create_and_send(
            user_id=user.id,
            title=title,
            body=body,
            notification_type=NotificationType.REMINDER,
            metadata={
                "remainingCalories": str(remaining),
                "caloriesConsumed": str(consumed),
                "type": slot.value,
            },
        )
