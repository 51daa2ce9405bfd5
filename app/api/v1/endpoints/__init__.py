"""API endpoint modules for v1."""

from app.api.v1.endpoints import (
    auth,
    dashboard,
    notifications,
    plants,
    users,
)

__all__ = [
    "auth",
    "dashboard",
    "notifications",
    "plants",
    "users",
]
