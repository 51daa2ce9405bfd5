"""Web Push delivery channel."""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from loguru import logger
from pywebpush import WebPushException, webpush

from app.config import settings

# Push services answer 404/410 for subscriptions that will never work again.
GONE_STATUS_CODES = frozenset({404, 410})


@dataclass(frozen=True)
class DeliveryResult:
    ok: bool
    permanently_invalid: bool = False
    status_code: Optional[int] = None
    error: Optional[str] = None


class PushChannel(Protocol):
    def send(self, subscription: Any, payload: dict[str, Any]) -> DeliveryResult:
        ...


class WebPushChannel:
    """Sends encrypted payloads to browser push endpoints with VAPID auth."""

    def __init__(
        self,
        private_key: str | None = None,
        subject: str | None = None,
        ttl: int | None = None,
    ):
        self.private_key = private_key if private_key is not None else settings.VAPID_PRIVATE_KEY
        self.subject = subject or settings.VAPID_SUBJECT
        self.ttl = ttl if ttl is not None else settings.PUSH_TTL_SECONDS

    @property
    def is_configured(self) -> bool:
        return bool(self.private_key)

    def send(self, subscription: Any, payload: dict[str, Any]) -> DeliveryResult:
        """Deliver ``payload`` to one subscription."""

        if not self.is_configured:
            logger.warning("VAPID keys not configured, skipping notification")
            return DeliveryResult(ok=False, error="VAPID keys not configured")

        try:
            webpush(
                subscription_info=subscription.subscription_info(),
                data=json.dumps(payload),
                vapid_private_key=self.private_key,
                vapid_claims={"sub": self.subject},
                ttl=self.ttl,
            )
        except WebPushException as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            return DeliveryResult(
                ok=False,
                permanently_invalid=status_code in GONE_STATUS_CODES,
                status_code=status_code,
                error=str(exc),
            )
        return DeliveryResult(ok=True)


__all__ = ["DeliveryResult", "GONE_STATUS_CODES", "PushChannel", "WebPushChannel"]
