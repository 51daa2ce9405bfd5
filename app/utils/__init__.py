"""Utility helpers package."""

from app.utils.exceptions import (
    AuthenticationError,
    DeliveryError,
    NotFoundError,
    PlantCareException,
    ValidationError,
)

__all__ = [
    "AuthenticationError",
    "DeliveryError",
    "NotFoundError",
    "PlantCareException",
    "ValidationError",
]
