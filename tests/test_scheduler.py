"""Tests for reminder scheduling."""

import asyncio

from apscheduler.triggers.cron import CronTrigger

from nutrilog.scheduler import ReminderScheduler
from nutrilog.services.reminders import ReminderService, ReminderSlot


def _scheduler(container) -> ReminderScheduler:  # type: ignore[no-untyped-def]
    service: ReminderService = container.reminder_service
    return ReminderScheduler(service, timezone="Europe/Berlin")


def test_registers_one_job_per_slot(container) -> None:
    scheduler = _scheduler(container)

    assert sorted(scheduler.job_ids()) == [
        "calorie_reminder_breakfast",
        "calorie_reminder_dinner",
        "calorie_reminder_lunch",
        "calorie_reminder_snacks",
    ]


def test_jobs_fire_at_slot_times(container) -> None:
    scheduler = _scheduler(container)

    job = scheduler.scheduler.get_job("calorie_reminder_lunch")

    assert isinstance(job.trigger, CronTrigger)
    fields = {f.name: str(f) for f in job.trigger.fields}
    assert fields["hour"] == "13"
    assert fields["minute"] == "30"
    assert job.args == (ReminderSlot.LUNCH,)


def test_start_and_shutdown(container) -> None:
    scheduler = _scheduler(container)

    async def run() -> None:
        scheduler.start()
        assert scheduler.running
        scheduler.start()
        scheduler.shutdown()

    asyncio.run(run())

    assert not scheduler.running
