"""Celery application for the reminder sweep."""
from __future__ import annotations

from typing import Optional

from celery import Celery
from celery.schedules import crontab
from pydantic import AnyUrl

from app.config import settings

REMINDER_TASK = "app.tasks.notifications.send_care_reminders"


def _url_or_redis(override: Optional[AnyUrl]) -> str:
    return str(override if override is not None else settings.REDIS_URL)


celery_app = Celery(
    "greenthumb",
    broker=_url_or_redis(settings.CELERY_BROKER_URL),
    backend=_url_or_redis(settings.CELERY_RESULT_BACKEND),
    include=["app.tasks.notifications"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone=settings.CARE_TIMEZONE,
    enable_utc=True,
    task_track_started=True,
    task_time_limit=15 * 60,
    task_soft_time_limit=10 * 60,
    result_expires=24 * 60 * 60,
    worker_prefetch_multiplier=1,
    broker_connection_retry_on_startup=True,
)

celery_app.conf.beat_schedule = {
    # Hourly so every user is reached at their own notification_time hour.
    "send-care-reminders": {
        "task": REMINDER_TASK,
        "schedule": crontab(minute=0),
        # A run that waited past the next tick would duplicate that tick's reminders.
        "options": {"expires": 55 * 60},
    },
}

__all__ = ["REMINDER_TASK", "celery_app"]
