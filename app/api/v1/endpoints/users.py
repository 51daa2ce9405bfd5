"""User profile endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api import deps
from app.db.models.user import User
from app.schemas import UserRead, UserUpdate
from app.services.auth import AuthService
from app.services.users import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(deps.get_current_user)) -> User:
    """Return the authenticated user profile."""

    return current_user


@router.patch("/me", response_model=UserRead)
def update_current_user(
    payload: UserUpdate,
    current_user: User = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db),
) -> User:
    """Update the display name or preferred notification time."""

    service = UserService(db)
    return service.update(current_user, payload)


@router.post("/me/recovery-key", response_model=UserRead)
def regenerate_recovery_key(
    current_user: User = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db),
) -> User:
    """Issue a new recovery key, invalidating the previous one."""

    return AuthService(db).regenerate_recovery_key(current_user)
