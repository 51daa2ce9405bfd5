"""Service for managing Web Push subscriptions."""
import uuid
from typing import Optional

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.config import settings
from app.db.models.push_subscription import PushSubscription
from app.services.push_channel import PushChannel
from app.utils.exceptions import DeliveryError, NotFoundError, ValidationError

TEST_MESSAGE = "Test notification from GreenThumb! Your reminders are working."


class SubscriptionNotFoundError(NotFoundError):
    """Raised when the user has no push subscription."""


class NotificationService:
    def __init__(self, db: Session):
        self.db = db

    def subscribe(
        self, user_id: uuid.UUID, subscription_info: dict, user_agent: Optional[str] = None
    ) -> PushSubscription:
        """Register the user's push subscription, replacing any previous one."""
        endpoint = subscription_info.get("endpoint")
        keys = subscription_info.get("keys") or {}
        missing = [
            name
            for name, value in (
                ("endpoint", endpoint),
                ("keys.p256dh", keys.get("p256dh")),
                ("keys.auth", keys.get("auth")),
            )
            if not value
        ]
        if missing:
            raise ValidationError("Invalid push subscription", details={"missing": missing})

        self.db.execute(delete(PushSubscription).where(PushSubscription.user_id == user_id))
        sub = PushSubscription(
            user_id=user_id,
            endpoint=endpoint,
            p256dh=keys["p256dh"],
            auth=keys["auth"],
            user_agent=user_agent[:255] if user_agent else None,
        )
        self.db.add(sub)
        self.db.commit()
        self.db.refresh(sub)
        logger.info("Push subscription saved", user_id=str(user_id))
        return sub

    def unsubscribe(self, user_id: uuid.UUID) -> None:
        """Remove the user's subscription; a missing one is not an error."""
        self.db.execute(delete(PushSubscription).where(PushSubscription.user_id == user_id))
        self.db.commit()

    def get_subscription(self, user_id: uuid.UUID) -> Optional[PushSubscription]:
        stmt = select(PushSubscription).where(PushSubscription.user_id == user_id)
        return self.db.scalars(stmt).first()

    def list_subscriptions(self) -> list[PushSubscription]:
        return list(self.db.scalars(select(PushSubscription)))

    def delete_subscription(self, subscription_id: uuid.UUID) -> bool:
        """Delete one subscription by id. Returns whether a row was removed."""
        result = self.db.execute(
            delete(PushSubscription).where(PushSubscription.id == subscription_id)
        )
        self.db.commit()
        return bool(result.rowcount)

    def send_test(self, user_id: uuid.UUID, channel: PushChannel) -> None:
        """Send the fixed diagnostic notification to the user's own subscription."""
        sub = self.get_subscription(user_id)
        if sub is None:
            raise SubscriptionNotFoundError("No push subscription found")

        payload = {"title": settings.PUSH_TITLE, "body": TEST_MESSAGE, "url": "/"}
        result = channel.send(sub, payload)
        if result.ok:
            return

        if result.permanently_invalid:
            self.delete_subscription(sub.id)
            logger.info("Expired push subscription removed", user_id=str(user_id))
            raise DeliveryError("Push subscription has expired", permanent=True)
        raise DeliveryError(
            "Failed to send test notification",
            details={"status_code": result.status_code, "error": result.error},
        )
