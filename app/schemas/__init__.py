"""Pydantic schemas package."""

from app.schemas.auth import (
    AnonymousRegister,
    AnonymousToken,
    RecoveryLogin,
    RefreshRequest,
    Token,
    TokenPayload,
)
from app.schemas.notification import (
    PushKeys,
    PushSubscriptionCreate,
    SubscriptionStatus,
    SweepReportRead,
    VapidPublicKey,
)
from app.schemas.plant import (
    BulkCareResponse,
    DashboardResponse,
    PlantCareStatus,
    PlantCreate,
    PlantRead,
    PlantUpdate,
    TrackStatusRead,
)
from app.schemas.user import UserCreate, UserLogin, UserRead, UserUpdate

__all__ = [
    "AnonymousRegister",
    "AnonymousToken",
    "RecoveryLogin",
    "RefreshRequest",
    "Token",
    "TokenPayload",
    "PushKeys",
    "PushSubscriptionCreate",
    "SubscriptionStatus",
    "SweepReportRead",
    "VapidPublicKey",
    "BulkCareResponse",
    "DashboardResponse",
    "PlantCareStatus",
    "PlantCreate",
    "PlantRead",
    "PlantUpdate",
    "TrackStatusRead",
    "UserCreate",
    "UserLogin",
    "UserRead",
    "UserUpdate",
]
