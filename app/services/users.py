"""Account profile operations."""
from __future__ import annotations

import uuid
from typing import Iterable

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.models.user import User
from app.schemas.user import UserUpdate
from app.utils.exceptions import NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when a user lookup fails."""


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: uuid.UUID) -> User:
        """Return a user by identifier or raise ``UserNotFoundError``."""

        user = self.db.get(User, user_id)
        if not user:
            raise UserNotFoundError("User not found")
        return user

    def users_by_id(self, user_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, User]:
        ids = list(set(user_ids))
        if not ids:
            return {}
        return {user.id: user for user in self.db.scalars(select(User).where(User.id.in_(ids)))}

    def update(self, user: User, payload: UserUpdate) -> User:
        """Apply a profile change; ``None`` leaves the notification time as it was."""

        changes = payload.model_dump(exclude_unset=True)
        if "name" in changes:
            name = changes["name"]
            user.name = name.strip() if name else None
        if changes.get("notification_time") is not None:
            user.notification_time = changes["notification_time"]

        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info("User profile updated", user_id=str(user.id), fields=sorted(changes))
        return user
