"""Pydantic models for user API interactions."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

NOTIFICATION_TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class UserCreate(BaseModel):
    """Schema for email registration input."""

    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    name: Optional[str] = Field(default=None, max_length=255)


class UserLogin(BaseModel):
    """Schema for user login request."""

    email: EmailStr
    password: str


class UserRead(BaseModel):
    """Schema returned after user registration or retrieval."""

    id: uuid.UUID
    email: Optional[EmailStr] = None
    name: Optional[str] = None
    notification_time: str
    recovery_key: Optional[str] = None
    is_active: bool
    is_anonymous: bool = False
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    """Schema for partial updates to the current user profile."""

    name: Optional[str] = Field(default=None, max_length=255)
    notification_time: Optional[str] = Field(default=None, pattern=NOTIFICATION_TIME_PATTERN)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def ensure_payload_not_empty(self) -> "UserUpdate":
        if not any(value is not None for value in self.model_dump().values()):
            raise ValueError("At least one field must be provided")
        return self
