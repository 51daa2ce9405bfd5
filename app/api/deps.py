"""Shared API dependencies."""
from __future__ import annotations

from collections.abc import Generator
from datetime import date
from typing import Optional

from fastapi import Depends, Header
from fastapi.security import OAuth2PasswordBearer
from loguru import logger
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.core.care_clock import care_timezone, today_in
from app.core.security import InvalidTokenError, decode_token, secrets_match
from app.db.models.user import User
from app.db.session import SessionLocal
from app.schemas import TokenPayload
from app.services.push_channel import PushChannel, WebPushChannel
from app.services.users import UserNotFoundError, UserService
from app.utils.exceptions import AuthenticationError

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/auth/login", auto_error=False
)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for request lifetime."""

    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError as exc:
        logger.error("Database session error", error=str(exc))
        db.rollback()
        raise
    finally:
        db.close()


def _resolve_user(token: Optional[str], db: Session) -> User:
    """Return the active user behind an access token or raise ``AuthenticationError``."""

    if not token:
        raise AuthenticationError("Could not validate credentials")
    try:
        payload = decode_token(token)
        if payload.get("type") != "access":
            raise InvalidTokenError("Token must be an access token")
        token_data = TokenPayload.model_validate(payload)
        user = UserService(db).get(token_data.sub)
    except (InvalidTokenError, ValidationError, ValueError, KeyError, UserNotFoundError) as exc:
        raise AuthenticationError("Could not validate credentials") from exc

    if not user.is_active:
        raise AuthenticationError("Could not validate credentials")
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)
) -> User:
    """Resolve the authenticated user from the Authorization header."""

    return _resolve_user(token, db)


def require_sweep_access(
    token: Optional[str] = Depends(optional_oauth2_scheme),
    sweep_secret: Optional[str] = Header(default=None, alias="X-Sweep-Secret"),
    db: Session = Depends(get_db),
) -> None:
    """Allow the sweep trigger for a signed-in user or a caller holding the shared secret."""

    if secrets_match(sweep_secret, settings.SWEEP_SECRET):
        return
    if token:
        _resolve_user(token, db)
        return
    raise AuthenticationError("Authentication or sweep secret required")


def get_push_channel() -> PushChannel:
    """Return the push delivery channel."""

    return WebPushChannel()


def get_care_today() -> date:
    """Return today's calendar date in the care timezone."""

    return today_in(care_timezone(settings.CARE_TIMEZONE))
