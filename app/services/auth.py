"""Authentication service layer."""
from __future__ import annotations

import uuid

from fastapi import HTTPException, status
from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.core.security import (
    InvalidTokenError,
    create_access_token,
    create_refresh_token,
    decode_token,
    generate_recovery_key,
    get_password_hash,
    verify_password,
)
from app.db.models.user import User
from app.schemas import Token, UserCreate


class EmailAlreadyExistsError(ValueError):
    """Raised when attempting to register with an email that already exists."""


class InvalidCredentialsError(ValueError):
    """Raised when authentication credentials are invalid."""


class AuthService:
    """Encapsulates user registration and authentication logic."""

    def __init__(self, db: Session):
        self.db = db

    def register_user(self, payload: UserCreate) -> User:
        """Create a new email/password user in the database."""

        email = payload.email.lower()
        existing_user = self.db.scalar(select(User).where(User.email == email))
        if existing_user:
            raise EmailAlreadyExistsError("A user with this email already exists.")

        user = User(
            email=email,
            hashed_password=get_password_hash(payload.password),
            name=payload.name,
            notification_time=settings.DEFAULT_NOTIFICATION_TIME,
        )

        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise EmailAlreadyExistsError("A user with this email already exists.") from exc
        self.db.refresh(user)
        logger.info("User registered", user_id=str(user.id))
        return user

    def register_anonymous(self, name: str | None = None) -> User:
        """Create an account identified only by a generated recovery key."""

        user = User(
            name=name,
            recovery_key=generate_recovery_key(),
            notification_time=settings.DEFAULT_NOTIFICATION_TIME,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info("Anonymous user registered", user_id=str(user.id))
        return user

    def authenticate_user(self, email: str, password: str) -> User:
        """Validate credentials and return the associated user."""

        user = self.db.scalar(select(User).where(User.email == email.lower()))
        if not user or not user.hashed_password or not verify_password(password, user.hashed_password):
            raise InvalidCredentialsError("Incorrect email or password")
        return user

    def authenticate_recovery_key(self, recovery_key: str) -> User:
        """Return the user owning ``recovery_key``."""

        user = self.db.scalar(select(User).where(User.recovery_key == recovery_key.strip()))
        if not user:
            raise InvalidCredentialsError("Invalid recovery key")
        return user

    def regenerate_recovery_key(self, user: User) -> User:
        """Replace the user's recovery key; the previous one stops working."""

        user.recovery_key = generate_recovery_key()
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info("Recovery key regenerated", user_id=str(user.id))
        return user

    def refresh_tokens(self, refresh_token: str) -> Token:
        """Exchange a valid refresh token for a new token pair."""

        try:
            payload = decode_token(refresh_token)
            user_id = uuid.UUID(str(payload["sub"]))
        except (InvalidTokenError, KeyError, ValueError) as exc:
            raise InvalidCredentialsError("Invalid refresh token") from exc
        if payload.get("type") != "refresh":
            raise InvalidCredentialsError("Invalid refresh token")

        user = self.db.get(User, user_id)
        if not user or not user.is_active:
            raise InvalidCredentialsError("Invalid refresh token")
        return self.create_tokens(user)

    def create_tokens(self, user: User) -> Token:
        """Generate access and refresh tokens for a user."""

        user_id = uuid.UUID(str(user.id))
        access = create_access_token(str(user_id))
        refresh = create_refresh_token(str(user_id))
        return Token(access_token=access, refresh_token=refresh)


def handle_email_exists(error: EmailAlreadyExistsError) -> None:
    """Raise an HTTP 400 error for duplicate email attempts."""

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=str(error),
    ) from error


def handle_invalid_credentials(error: InvalidCredentialsError) -> None:
    """Raise an HTTP 401 error for invalid login attempts."""

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=str(error),
        headers={"WWW-Authenticate": "Bearer"},
    ) from error
