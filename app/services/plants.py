"""Owner-scoped data access for plant records."""
from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Mapping

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.care_clock import TRACK_FIELDS, CareTrack
from app.db.models.plant import Plant
from app.schemas.plant import PlantCreate
from app.utils.exceptions import NotFoundError, ValidationError

IMMUTABLE_FIELDS = frozenset({"id", "user_id", "created_at"})


class PlantNotFoundError(NotFoundError):
    """Raised when a plant does not exist or belongs to another user."""


class PlantService:
    """CRUD operations on plants, always scoped to an owner."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, owner_id: uuid.UUID, payload: PlantCreate) -> Plant:
        """Add a plant for ``owner_id``."""

        plant = Plant(user_id=owner_id, **payload.model_dump())
        self.db.add(plant)
        self.db.commit()
        self.db.refresh(plant)
        logger.info("Plant created", user_id=str(owner_id), plant_id=str(plant.id))
        return plant

    def list_by_owner(self, owner_id: uuid.UUID) -> list[Plant]:
        """Return all plants of a user in storage order."""

        stmt = select(Plant).where(Plant.user_id == owner_id)
        return list(self.db.scalars(stmt))

    def list_all(self) -> list[Plant]:
        """Return every plant; only the reminder sweep needs this."""

        return list(self.db.scalars(select(Plant)))

    def get(self, owner_id: uuid.UUID, plant_id: uuid.UUID) -> Plant:
        """Return one plant owned by ``owner_id`` or raise ``PlantNotFoundError``."""

        plant = self.db.get(Plant, plant_id)
        if plant is None or plant.user_id != owner_id:
            raise PlantNotFoundError("Plant not found", details={"plant_id": str(plant_id)})
        return plant

    def update(
        self, owner_id: uuid.UUID, plant_id: uuid.UUID, fields: Mapping[str, Any]
    ) -> Plant:
        """Apply a partial update and return the refreshed plant."""

        forbidden = IMMUTABLE_FIELDS.intersection(fields)
        if forbidden:
            raise ValidationError(
                "Plant identity and ownership cannot be changed",
                details={"fields": sorted(forbidden)},
            )

        plant = self.get(owner_id, plant_id)
        for field, value in fields.items():
            setattr(plant, field, value)

        self.db.add(plant)
        self.db.commit()
        self.db.refresh(plant)
        return plant

    def record_care(
        self, owner_id: uuid.UUID, plant_id: uuid.UUID, track: CareTrack, on_date: date
    ) -> Plant:
        """Mark one care action as performed on ``on_date``."""

        return self.update(owner_id, plant_id, {TRACK_FIELDS[track].last_date_attr: on_date})

    def delete(self, owner_id: uuid.UUID, plant_id: uuid.UUID) -> None:
        """Remove a plant owned by ``owner_id``."""

        plant = self.get(owner_id, plant_id)
        self.db.delete(plant)
        self.db.commit()
        logger.info("Plant deleted", user_id=str(owner_id), plant_id=str(plant_id))
