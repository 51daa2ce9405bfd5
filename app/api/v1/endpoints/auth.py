"""Authentication API endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.schemas import (
    AnonymousRegister,
    AnonymousToken,
    RecoveryLogin,
    RefreshRequest,
    Token,
    UserCreate,
    UserLogin,
    UserRead,
)
from app.services.auth import (
    AuthService,
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    handle_email_exists,
    handle_invalid_credentials,
)


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(payload: UserCreate, db: Session = Depends(get_db)) -> UserRead:
    """Register a new email/password user and return the created entity."""

    service = AuthService(db)
    try:
        user = service.register_user(payload)
    except EmailAlreadyExistsError as exc:
        handle_email_exists(exc)
    return user


@router.post("/anonymous", response_model=AnonymousToken, status_code=status.HTTP_201_CREATED)
def register_anonymous(
    payload: AnonymousRegister | None = None, db: Session = Depends(get_db)
) -> AnonymousToken:
    """Create an account without email and return tokens plus its recovery key."""

    service = AuthService(db)
    user = service.register_anonymous(payload.name if payload else None)
    tokens = service.create_tokens(user)
    return AnonymousToken(**tokens.model_dump(), recovery_key=user.recovery_key)


@router.post("/login", response_model=Token)
def login(payload: UserLogin, db: Session = Depends(get_db)) -> Token:
    """Authenticate a user and return JWT tokens."""

    service = AuthService(db)
    try:
        user = service.authenticate_user(payload.email, payload.password)
    except InvalidCredentialsError as exc:
        handle_invalid_credentials(exc)
    return service.create_tokens(user)


@router.post("/login-recovery", response_model=Token)
def login_with_recovery_key(payload: RecoveryLogin, db: Session = Depends(get_db)) -> Token:
    """Authenticate with a recovery key and return JWT tokens."""

    service = AuthService(db)
    try:
        user = service.authenticate_recovery_key(payload.recovery_key)
    except InvalidCredentialsError as exc:
        handle_invalid_credentials(exc)
    return service.create_tokens(user)


@router.post("/refresh", response_model=Token)
def refresh_tokens(payload: RefreshRequest, db: Session = Depends(get_db)) -> Token:
    """Issue a new token pair from a refresh token."""

    service = AuthService(db)
    try:
        return service.refresh_tokens(payload.refresh_token)
    except InvalidCredentialsError as exc:
        handle_invalid_credentials(exc)
