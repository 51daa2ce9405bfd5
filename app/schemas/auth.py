"""Authentication related schemas."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Token(BaseModel):
    """Token response returned after successful authentication."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class TokenPayload(BaseModel):
    """Payload data extracted from access tokens."""

    sub: uuid.UUID
    exp: datetime
    type: str


class AnonymousRegister(BaseModel):
    """Request body for creating an account without email."""

    name: Optional[str] = Field(default=None, max_length=255)


class RecoveryLogin(BaseModel):
    """Login using a previously issued recovery key."""

    recovery_key: str = Field(min_length=1, max_length=64)


class AnonymousToken(Token):
    """Tokens plus the recovery key the client must keep to log in again."""

    recovery_key: str


class RefreshRequest(BaseModel):
    refresh_token: str = Field(min_length=1)
