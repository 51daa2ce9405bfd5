"""Custom exception classes and error handling utilities."""
from typing import Any, Dict, Optional
from fastapi import HTTPException, status
from loguru import logger


class PlantCareException(Exception):
    """Base exception for the application."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(PlantCareException):
    """Malformed input to a create or update operation."""
    pass


class NotFoundError(PlantCareException):
    """Referenced record does not exist or is not owned by the caller."""
    pass


class AuthenticationError(PlantCareException):
    """No resolvable user identity."""
    pass


class DeliveryError(PlantCareException):
    """Push delivery failed; ``permanent`` marks an endpoint that is gone for good."""

    def __init__(
        self,
        message: str,
        *,
        permanent: bool = False,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.permanent = permanent
        super().__init__(message, details)


def handle_validation_error(error: ValidationError) -> HTTPException:
    """Handle validation errors."""
    logger.warning(f"Validation error: {error.message}")
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={
            "message": error.message,
            "details": error.details
        }
    )


def handle_not_found_error(error: NotFoundError) -> HTTPException:
    """Handle lookups of missing or foreign records."""
    logger.info(f"Not found: {error.message}")
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=error.message
    )


def handle_authentication_error(error: AuthenticationError) -> HTTPException:
    """Handle authentication errors."""
    logger.warning(f"Authentication error: {error.message}")
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=error.message,
        headers={"WWW-Authenticate": "Bearer"},
    )


def handle_delivery_error(error: DeliveryError) -> HTTPException:
    """Handle push delivery errors surfaced to an interactive caller."""
    logger.error(f"Delivery error: {error.message}")
    if error.permanent:
        return HTTPException(
            status_code=status.HTTP_410_GONE,
            detail=error.message
        )
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=error.message
    )
