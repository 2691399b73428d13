"""Background job scheduling for reminders."""

import logging
from dataclasses import dataclass, field

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from nutrilog.services.reminders import SLOT_TIMES, ReminderService

logger = logging.getLogger(__name__)

MISFIRE_GRACE_SECONDS = 3600


@dataclass
class ReminderScheduler:
    """Owns the APScheduler instance that fires calorie reminders."""

    reminder_service: ReminderService
    timezone: str = "UTC"
    scheduler: AsyncIOScheduler = field(init=False)

    def __post_init__(self) -> None:
        self.scheduler = AsyncIOScheduler(
            timezone=self.timezone,
            job_defaults={
                "coalesce": True,
                "max_instances": 1,
                "misfire_grace_time": MISFIRE_GRACE_SECONDS,
            },
        )
        for slot, (hour, minute) in SLOT_TIMES.items():
            self.scheduler.add_job(
                self.reminder_service.send_calorie_reminders,
                trigger=CronTrigger(hour=hour, minute=minute, timezone=self.timezone),
                args=[slot],
                id=f"calorie_reminder_{slot.value.lower()}",
                name=f"{slot.value.title()} calorie reminder",
                replace_existing=True,
            )

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def job_ids(self) -> list[str]:
        return [job.id for job in self.scheduler.get_jobs()]

    def start(self) -> None:
        """Start firing jobs; must be called with a running event loop."""
        if self.scheduler.running:
            logger.warning("Reminder scheduler already running")
            return
        self.scheduler.start()
        logger.info("Reminder scheduler started", extra={"jobs": len(SLOT_TIMES)})

    def shutdown(self) -> None:
        if not self.scheduler.running:
            return
        self.scheduler.shutdown(wait=False)
        logger.info("Reminder scheduler stopped")
