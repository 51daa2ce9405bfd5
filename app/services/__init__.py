"""Service layer package."""

from app.services.auth import AuthService
from app.services.dashboard import DashboardService
from app.services.notification_service import NotificationService
from app.services.plants import PlantService
from app.services.push_channel import WebPushChannel
from app.services.reminders import ReminderSweep
from app.services.users import UserService

__all__ = [
    "AuthService",
    "DashboardService",
    "NotificationService",
    "PlantService",
    "ReminderSweep",
    "UserService",
    "WebPushChannel",
]
