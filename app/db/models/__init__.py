"""Database models package."""
from app.db.models.user import User
from app.db.models.plant import Plant
from app.db.models.push_subscription import PushSubscription

__all__ = [
    "User",
    "Plant",
    "PushSubscription",
]
