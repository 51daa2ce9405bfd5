"""Celery tasks for plant care reminders."""
from __future__ import annotations

from datetime import date, datetime, timezone

from loguru import logger

from app.celery_app import REMINDER_TASK, celery_app
from app.config import settings
from app.core.care_clock import care_timezone, today_in
from app.db.session import SessionLocal
from app.services.push_channel import WebPushChannel
from app.services.reminders import ReminderSweep


@celery_app.task(name=REMINDER_TASK)
def send_care_reminders(
    target_date: str | None = None, respect_notification_time: bool = True
) -> dict:
    """Push a care summary to every subscribed user with plants due."""

    db = SessionLocal()
    now = datetime.now(timezone.utc)
    today = (
        date.fromisoformat(target_date)
        if target_date
        else today_in(care_timezone(settings.CARE_TIMEZONE), now)
    )

    try:
        channel = WebPushChannel()
        if not channel.is_configured:
            logger.warning("Care reminders skipped, VAPID keys not configured")
            return {"date": today.isoformat(), "notified": 0, "skipped": True}

        report = ReminderSweep(db, channel).run(
            today, now=now, respect_notification_time=respect_notification_time
        )
        result = report.as_dict()
        result["notified"] = len(report.notified_user_ids)
        return result

    finally:
        db.close()
