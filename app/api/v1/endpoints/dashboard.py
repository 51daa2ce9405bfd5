"""Dashboard and bulk watering endpoints."""
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_care_today, get_current_user, get_db
from app.db.models.user import User
from app.schemas import BulkCareResponse, DashboardResponse, PlantRead
from app.services.dashboard import BulkCareResult, DashboardService


router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _bulk_response(result: BulkCareResult) -> BulkCareResponse:
    return BulkCareResponse(
        candidates=result.candidates,
        updated=result.updated,
        plants=[PlantRead.model_validate(plant) for plant in result.plants],
    )


@router.get("", response_model=DashboardResponse)
def read_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_care_today),
) -> DashboardResponse:
    """Return plants split into needs-water and up-to-date groups."""

    groups = DashboardService(db).overview(current_user.id, today)
    return DashboardResponse(
        today=today, needs_water=groups.needs_water, up_to_date=groups.up_to_date
    )


@router.post("/water-all", response_model=BulkCareResponse)
def water_all_due(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_care_today),
) -> BulkCareResponse:
    """Mark every plant that needs water as watered today."""

    return _bulk_response(DashboardService(db).water_all_due(current_user.id, today))


@router.post("/postpone-all", response_model=BulkCareResponse)
def postpone_all_due(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_care_today),
) -> BulkCareResponse:
    """Postpone every due plant by one day."""

    return _bulk_response(DashboardService(db).postpone_all_due(current_user.id, today))
