"""Care reminder sweep: turns due care across all users into push notifications."""
from __future__ import annotations

import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Iterable, Optional

from loguru import logger
from sqlalchemy.orm import Session

from app.config import settings
from app.core.care_clock import CareTrack, care_timezone, plant_schedules
from app.services.notification_service import NotificationService
from app.services.plants import PlantService
from app.services.push_channel import PushChannel
from app.services.users import UserService

REMINDER_VERBS: dict[CareTrack, str] = {
    CareTrack.WATER: "Water",
    CareTrack.FERTILIZE: "Fertilize",
    CareTrack.REPOT: "Repot",
    CareTrack.PRUNE: "Prune",
}
LINE_SEPARATOR = "\n"


def group_due_plants(plants: Iterable[Any], today: date) -> dict[CareTrack, list[str]]:
    """Return plant names per care track that are overdue or due today."""

    groups: dict[CareTrack, list[str]] = {track: [] for track in CareTrack}
    for plant in plants:
        for schedule in plant_schedules(plant, today):
            if schedule.needs_attention:
                groups[schedule.track].append(plant.name)
    return groups


def compose_reminder(plants: Iterable[Any], today: date) -> Optional[str]:
    """Build the notification body for one user, or ``None`` if nothing is due.

    One line per care track: ``"Water: Fern"`` for a single plant,
    ``"Water 3 plants"`` for several.
    """

    lines = []
    for track, names in group_due_plants(plants, today).items():
        if not names:
            continue
        verb = REMINDER_VERBS[track]
        if len(names) == 1:
            lines.append(f"{verb}: {names[0]}")
        else:
            lines.append(f"{verb} {len(names)} plants")
    if not lines:
        return None
    return LINE_SEPARATOR.join(lines)


@dataclass(frozen=True)
class SubscriptionTarget:
    """Plain copy of a push subscription, independent of the session that loaded it."""

    id: uuid.UUID
    user_id: uuid.UUID
    endpoint: str
    keys: dict[str, str]

    @classmethod
    def from_subscription(cls, sub: Any) -> "SubscriptionTarget":
        info = sub.subscription_info()
        return cls(id=sub.id, user_id=sub.user_id, endpoint=info["endpoint"], keys=info["keys"])

    def subscription_info(self) -> dict[str, Any]:
        return {"endpoint": self.endpoint, "keys": dict(self.keys)}


@dataclass
class SweepReport:
    date: date
    notified_user_ids: list[uuid.UUID] = field(default_factory=list)
    skipped_user_ids: list[uuid.UUID] = field(default_factory=list)
    failed_user_ids: list[uuid.UUID] = field(default_factory=list)
    removed_subscription_ids: list[uuid.UUID] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "notified_user_ids": [str(item) for item in self.notified_user_ids],
            "skipped_user_ids": [str(item) for item in self.skipped_user_ids],
            "failed_user_ids": [str(item) for item in self.failed_user_ids],
            "removed_subscription_ids": [str(item) for item in self.removed_subscription_ids],
        }


class ReminderSweep:
    """One full pass over every push subscription."""

    def __init__(self, db: Session, channel: PushChannel):
        self.db = db
        self.channel = channel
        self.plants = PlantService(db)
        self.notifications = NotificationService(db)
        self.users = UserService(db)

    def run(
        self,
        today: date,
        *,
        now: Optional[datetime] = None,
        respect_notification_time: bool = False,
    ) -> SweepReport:
        """Send one reminder per subscribed user with care due on ``today``.

        With ``respect_notification_time`` only users whose preferred
        notification hour matches the current hour are considered.
        """

        report = SweepReport(date=today)
        plants_by_owner: dict[uuid.UUID, list[Any]] = defaultdict(list)
        for plant in self.plants.list_all():
            plants_by_owner[plant.user_id].append(plant)

        # Deleting an expired subscription commits, which expires every loaded row.
        targets = [
            SubscriptionTarget.from_subscription(sub)
            for sub in self.notifications.list_subscriptions()
        ]
        current_hour = None
        hours: dict[uuid.UUID, int] = {}
        if respect_notification_time:
            now = now or datetime.now(timezone.utc)
            current_hour = now.astimezone(care_timezone(settings.CARE_TIMEZONE)).hour
            users = self.users.users_by_id(target.user_id for target in targets)
            hours = {user_id: user.notification_hour() for user_id, user in users.items()}

        for target in targets:
            user_id = target.user_id
            if current_hour is not None and hours.get(user_id) != current_hour:
                report.skipped_user_ids.append(user_id)
                continue
            try:
                self._notify(target, plants_by_owner.get(user_id, []), today, report)
            except Exception as exc:
                self.db.rollback()
                logger.error(
                    "Care reminder failed",
                    user_id=str(user_id),
                    error=str(exc),
                )
                report.failed_user_ids.append(user_id)
                continue

        logger.info(
            "Care reminder sweep completed",
            date=today.isoformat(),
            subscriptions=len(targets),
            notified=len(report.notified_user_ids),
            skipped=len(report.skipped_user_ids),
            failures=len(report.failed_user_ids),
            removed=len(report.removed_subscription_ids),
        )
        return report

    def _notify(
        self, target: SubscriptionTarget, plants: list[Any], today: date, report: SweepReport
    ) -> None:
        user_id, subscription_id = target.user_id, target.id
        message = compose_reminder(plants, today)
        if message is None:
            report.skipped_user_ids.append(user_id)
            return

        payload = {"title": settings.PUSH_TITLE, "body": message, "url": "/"}
        result = self.channel.send(target, payload)
        if result.ok:
            logger.info("Care reminder sent", user_id=str(user_id))
            report.notified_user_ids.append(user_id)
            return

        report.failed_user_ids.append(user_id)
        if result.permanently_invalid:
            self.notifications.delete_subscription(subscription_id)
            report.removed_subscription_ids.append(subscription_id)
            logger.info(
                "Expired push subscription removed",
                user_id=str(user_id),
                status_code=result.status_code,
            )
        else:
            logger.warning(
                "Care reminder delivery failed",
                user_id=str(user_id),
                status_code=result.status_code,
                error=result.error,
            )
