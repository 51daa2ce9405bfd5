"""API router for version 1."""
from fastapi import APIRouter

from app.api.v1.endpoints import (
    auth,
    dashboard,
    notifications,
    plants,
    users,
)


api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(plants.router)
api_router.include_router(dashboard.router)
api_router.include_router(notifications.router)
