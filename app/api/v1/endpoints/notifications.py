"""Push subscription and reminder endpoints."""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Body, Depends, Header, Query, Response, status
from sqlalchemy.orm import Session

from app.api import deps
from app.config import settings
from app.db.models.user import User
from app.schemas import PushSubscriptionCreate, SubscriptionStatus, SweepReportRead, VapidPublicKey
from app.services.notification_service import NotificationService, SubscriptionNotFoundError
from app.services.push_channel import PushChannel
from app.services.reminders import ReminderSweep
from app.utils.exceptions import (
    DeliveryError,
    ValidationError,
    handle_delivery_error,
    handle_not_found_error,
    handle_validation_error,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/vapid-public-key", response_model=VapidPublicKey)
def get_vapid_public_key() -> VapidPublicKey:
    return VapidPublicKey(publicKey=settings.VAPID_PUBLIC_KEY)


@router.get("/subscription", response_model=SubscriptionStatus)
def get_subscription_status(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
) -> SubscriptionStatus:
    service = NotificationService(db)
    return SubscriptionStatus(subscribed=service.get_subscription(current_user.id) is not None)


@router.post("/subscribe", status_code=status.HTTP_201_CREATED)
def subscribe(
    subscription: PushSubscriptionCreate = Body(...),
    user_agent: Optional[str] = Header(default=None),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
) -> dict:
    service = NotificationService(db)
    try:
        service.subscribe(current_user.id, subscription.model_dump(), user_agent)
    except ValidationError as exc:
        raise handle_validation_error(exc) from exc
    return {"status": "success"}


@router.delete("/subscribe", status_code=status.HTTP_204_NO_CONTENT)
def unsubscribe(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
) -> Response:
    NotificationService(db).unsubscribe(current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/test")
def test_notification(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
    channel: PushChannel = Depends(deps.get_push_channel),
) -> dict:
    """Send a diagnostic notification to the caller's own subscription."""

    service = NotificationService(db)
    try:
        service.send_test(current_user.id, channel)
    except SubscriptionNotFoundError as exc:
        raise handle_not_found_error(exc) from exc
    except DeliveryError as exc:
        raise handle_delivery_error(exc) from exc
    return {"status": "sent"}


@router.post(
    "/sweep",
    response_model=SweepReportRead,
    dependencies=[Depends(deps.require_sweep_access)],
)
def run_reminder_sweep(
    respect_notification_time: bool = Query(
        False, description="Only notify users whose preferred hour is the current hour"
    ),
    db: Session = Depends(deps.get_db),
    channel: PushChannel = Depends(deps.get_push_channel),
    today: date = Depends(deps.get_care_today),
) -> SweepReportRead:
    """Run one reminder sweep over every subscription; meant for external schedulers."""

    report = ReminderSweep(db, channel).run(
        today, respect_notification_time=respect_notification_time
    )
    return SweepReportRead(
        date=report.date,
        notified_user_ids=report.notified_user_ids,
        skipped_user_ids=report.skipped_user_ids,
        failed_user_ids=report.failed_user_ids,
        removed_subscription_ids=report.removed_subscription_ids,
    )
