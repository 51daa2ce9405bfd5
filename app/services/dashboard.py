"""Dashboard aggregation and bulk watering actions."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Iterable, Sequence

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.care_clock import CareTrack, plant_schedules, track_schedule
from app.db.models.plant import Plant
from app.schemas.plant import PlantCareStatus, PlantRead, TrackStatusRead
from app.services.plants import PlantNotFoundError, PlantService


@dataclass
class DashboardPartition:
    needs_water: list[Any]
    up_to_date: list[Any]


@dataclass
class BulkCareResult:
    candidates: int
    updated: int
    plants: list[Plant] = field(default_factory=list)


def _watering_sort_key(plant: Any, today: date) -> tuple[date, str]:
    schedule = track_schedule(plant, CareTrack.WATER, today)
    due = schedule.due_date if schedule else date.max
    return due, str(plant.id)


def partition(plants: Iterable[Any], today: date) -> DashboardPartition:
    """Split plants into those needing water today and those that do not.

    Both groups are ordered by watering due date, then by id, so the most
    overdue plant comes first and the ordering is total.
    """

    needs_water: list[Any] = []
    up_to_date: list[Any] = []
    for plant in sorted(plants, key=lambda item: _watering_sort_key(item, today)):
        schedule = track_schedule(plant, CareTrack.WATER, today)
        if schedule is not None and schedule.needs_attention:
            needs_water.append(plant)
        else:
            up_to_date.append(plant)
    return DashboardPartition(needs_water=needs_water, up_to_date=up_to_date)


def describe_plant(plant: Plant, today: date) -> PlantCareStatus:
    """Attach the status of every active care track to a plant."""

    schedules = plant_schedules(plant, today)
    watering = next(item for item in schedules if item.track is CareTrack.WATER)
    return PlantCareStatus(
        plant=PlantRead.model_validate(plant),
        next_watering_date=watering.due_date,
        watering_status=watering.status,
        tracks=[
            TrackStatusRead(
                track=item.track,
                due_date=item.due_date,
                status=item.status,
                days_overdue=item.days_overdue,
                days_until=item.days_until,
            )
            for item in schedules
        ],
    )


class DashboardService:
    """Builds a user's dashboard and runs bulk actions on due plants."""

    def __init__(self, db: Session, plant_service: PlantService | None = None):
        self.db = db
        self.plants = plant_service or PlantService(db)

    def overview(self, owner_id: uuid.UUID, today: date) -> DashboardPartition:
        """Return the partitioned dashboard for ``owner_id``."""

        groups = partition(self.plants.list_by_owner(owner_id), today)
        return DashboardPartition(
            needs_water=[describe_plant(plant, today) for plant in groups.needs_water],
            up_to_date=[describe_plant(plant, today) for plant in groups.up_to_date],
        )

    def water_all_due(self, owner_id: uuid.UUID, today: date) -> BulkCareResult:
        """Mark every plant that needs water as watered today."""

        return self._set_watering_date(owner_id, today, today, action="water")

    def postpone_all_due(self, owner_id: uuid.UUID, today: date) -> BulkCareResult:
        """Push every due plant back by setting its last watering to yesterday.

        The offset is fixed at one day; it does not mark the plant as watered
        today.
        """

        return self._set_watering_date(owner_id, today, today - timedelta(days=1), action="postpone")

    def _set_watering_date(
        self, owner_id: uuid.UUID, today: date, target: date, *, action: str
    ) -> BulkCareResult:
        due_plants: Sequence[Plant] = partition(self.plants.list_by_owner(owner_id), today).needs_water
        # A plant already set to the target date was handled earlier today.
        # Plain ids survive the rollback that expires every loaded plant.
        candidate_ids = [plant.id for plant in due_plants if plant.last_watered_date != target]

        updated: list[Plant] = []
        for plant_id in candidate_ids:
            try:
                updated.append(
                    self.plants.update(owner_id, plant_id, {"last_watered_date": target})
                )
            except PlantNotFoundError:
                logger.warning(
                    "Plant disappeared during bulk update",
                    user_id=str(owner_id),
                    plant_id=str(plant_id),
                    action=action,
                )
            except SQLAlchemyError as exc:
                self.db.rollback()
                logger.error(
                    "Bulk plant update failed",
                    user_id=str(owner_id),
                    plant_id=str(plant_id),
                    action=action,
                    error=str(exc),
                )

        logger.info(
            "Bulk watering action completed",
            user_id=str(owner_id),
            action=action,
            candidates=len(candidate_ids),
            updated=len(updated),
        )
        return BulkCareResult(candidates=len(candidate_ids), updated=len(updated), plants=updated)
