"""Pydantic models for push subscription and reminder endpoints."""
from __future__ import annotations

import datetime
import uuid
from typing import Optional

from pydantic import BaseModel, Field


class PushKeys(BaseModel):
    p256dh: str = Field(min_length=1)
    auth: str = Field(min_length=1)


class PushSubscriptionCreate(BaseModel):
    """Browser ``PushSubscription.toJSON()`` payload."""

    endpoint: str = Field(min_length=1)
    keys: PushKeys
    expirationTime: Optional[float] = None


class SubscriptionStatus(BaseModel):
    subscribed: bool


class VapidPublicKey(BaseModel):
    publicKey: Optional[str] = None


class SweepReportRead(BaseModel):
    """Summary of one reminder sweep."""

    date: datetime.date
    notified_user_ids: list[uuid.UUID]
    skipped_user_ids: list[uuid.UUID]
    failed_user_ids: list[uuid.UUID]
    removed_subscription_ids: list[uuid.UUID]
