"""Plant CRUD endpoints."""
from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_care_today, get_current_user, get_db
from app.core.care_clock import CareTrack
from app.db.models.plant import Plant
from app.db.models.user import User
from app.schemas import PlantCreate, PlantRead, PlantUpdate
from app.services.plants import PlantNotFoundError, PlantService
from app.utils.exceptions import ValidationError, handle_not_found_error, handle_validation_error


router = APIRouter(prefix="/plants", tags=["plants"])


@router.post("", response_model=PlantRead, status_code=status.HTTP_201_CREATED)
def create_plant(
    payload: PlantCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Plant:
    """Add a plant for the authenticated user."""

    return PlantService(db).create(current_user.id, payload)


@router.get("", response_model=list[PlantRead])
def list_plants(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[Plant]:
    """Return every plant owned by the authenticated user, unordered."""

    return PlantService(db).list_by_owner(current_user.id)


@router.get("/{plant_id}", response_model=PlantRead)
def read_plant(
    plant_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Plant:
    try:
        return PlantService(db).get(current_user.id, plant_id)
    except PlantNotFoundError as exc:
        raise handle_not_found_error(exc) from exc


@router.patch("/{plant_id}", response_model=PlantRead)
def update_plant(
    plant_id: uuid.UUID,
    payload: PlantUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Plant:
    """Apply a partial update; identity and ownership fields are rejected."""

    service = PlantService(db)
    try:
        return service.update(current_user.id, plant_id, payload.model_dump(exclude_unset=True))
    except PlantNotFoundError as exc:
        raise handle_not_found_error(exc) from exc
    except ValidationError as exc:
        raise handle_validation_error(exc) from exc


@router.delete("/{plant_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_plant(
    plant_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    try:
        PlantService(db).delete(current_user.id, plant_id)
    except PlantNotFoundError as exc:
        raise handle_not_found_error(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{plant_id}/care/{track}", response_model=PlantRead)
def record_care(
    plant_id: uuid.UUID,
    track: CareTrack,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_care_today),
) -> Plant:
    """Mark the plant as watered, fertilized, repotted or pruned today."""

    try:
        return PlantService(db).record_care(current_user.id, plant_id, track, today)
    except PlantNotFoundError as exc:
        raise handle_not_found_error(exc) from exc
