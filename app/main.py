"""FastAPI application factory."""
from __future__ import annotations

from typing import List

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.api.v1 import api_router
from app.config import settings
from app.utils.exceptions import (
    AuthenticationError,
    DeliveryError,
    NotFoundError,
    PlantCareException,
    ValidationError,
    handle_authentication_error,
    handle_delivery_error,
    handle_not_found_error,
    handle_validation_error,
)


tags_metadata: List[dict[str, str]] = [
    {"name": "auth", "description": "Register accounts and issue authentication tokens."},
    {"name": "users", "description": "Manage profile and reminder preferences."},
    {"name": "plants", "description": "Add, edit and care for plants."},
    {"name": "dashboard", "description": "Plants grouped by watering need, bulk actions."},
    {"name": "notifications", "description": "Web push subscriptions and care reminders."},
    {"name": "health", "description": "Liveness probe for load balancers."},
]


def _to_http_exception(exc: PlantCareException) -> HTTPException:
    if isinstance(exc, ValidationError):
        return handle_validation_error(exc)
    if isinstance(exc, NotFoundError):
        return handle_not_found_error(exc)
    if isinstance(exc, AuthenticationError):
        return handle_authentication_error(exc)
    if isinstance(exc, DeliveryError):
        return handle_delivery_error(exc)
    logger.error("Unhandled application error", error=exc.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.message)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Plant watering reminders with web push notifications.",
        version="0.1.0",
        openapi_tags=tags_metadata,
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=jsonable_encoder({"detail": exc.errors(), "message": "Validation failed"}),
        )

    @app.exception_handler(PlantCareException)
    async def plant_care_exception_handler(
        request: Request, exc: PlantCareException
    ) -> JSONResponse:
        """Map domain errors that escaped an endpoint to their HTTP status."""

        http_exc = _to_http_exception(exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content=jsonable_encoder({"detail": http_exc.detail}),
            headers=http_exc.headers,
        )

    @app.get("/health", tags=["health"])
    def health_check(db: Session = Depends(get_db)) -> JSONResponse:
        try:
            db.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.error("Health check failed", error=str(exc))
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unavailable", "database": "unreachable"},
            )
        return JSONResponse(content={"status": "ok", "database": "ok"})

    app.include_router(api_router, prefix=settings.API_V1_STR)
    return app


app = create_app()
