"""Pydantic models for plant records and dashboard responses."""
from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.config import settings
from app.core.care_clock import CareStatus, CareTrack, care_timezone, to_care_date

DATE_FIELDS = (
    "last_watered_date",
    "last_fertilized_date",
    "last_repotted_date",
    "last_pruned_date",
)
REQUIRED_COLUMNS = ("name", "location", "photo_url", "water_frequency_days", "last_watered_date")


def strip_time_of_day(value: Any) -> Any:
    """Accept ISO dates or instants and keep only the calendar day."""

    if isinstance(value, str) and "T" in value:
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(value, datetime):
        return to_care_date(value, care_timezone(settings.CARE_TIMEZONE))
    return value


class PlantCreate(BaseModel):
    """Payload for adding a plant."""

    name: str = Field(min_length=1, max_length=255)
    location: str = Field(min_length=1, max_length=255)
    photo_url: str = Field(min_length=1)
    water_frequency_days: int = Field(ge=1)
    last_watered_date: date
    notes: str = ""

    fertilize_frequency_days: Optional[int] = Field(default=None, ge=1)
    last_fertilized_date: Optional[date] = None
    repot_frequency_months: Optional[int] = Field(default=None, ge=1)
    last_repotted_date: Optional[date] = None
    prune_frequency_months: Optional[int] = Field(default=None, ge=1)
    last_pruned_date: Optional[date] = None

    @field_validator(*DATE_FIELDS, mode="before")
    @classmethod
    def normalize_dates(cls, value: Any) -> Any:
        return strip_time_of_day(value)


class PlantUpdate(BaseModel):
    """Partial update of a plant; ownership and identity are not writable."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    location: Optional[str] = Field(default=None, min_length=1, max_length=255)
    photo_url: Optional[str] = Field(default=None, min_length=1)
    water_frequency_days: Optional[int] = Field(default=None, ge=1)
    last_watered_date: Optional[date] = None
    notes: Optional[str] = None

    fertilize_frequency_days: Optional[int] = Field(default=None, ge=1)
    last_fertilized_date: Optional[date] = None
    repot_frequency_months: Optional[int] = Field(default=None, ge=1)
    last_repotted_date: Optional[date] = None
    prune_frequency_months: Optional[int] = Field(default=None, ge=1)
    last_pruned_date: Optional[date] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator(*DATE_FIELDS, mode="before")
    @classmethod
    def normalize_dates(cls, value: Any) -> Any:
        return strip_time_of_day(value)

    @model_validator(mode="after")
    def check_fields(self) -> "PlantUpdate":
        provided = self.model_dump(exclude_unset=True)
        if not provided:
            raise ValueError("At least one field must be provided")
        for field in REQUIRED_COLUMNS:
            if field in provided and provided[field] is None:
                raise ValueError(f"{field} cannot be null")
        return self


class PlantRead(BaseModel):
    """Plant as returned to its owner."""

    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    location: str
    photo_url: str
    water_frequency_days: int
    last_watered_date: date
    fertilize_frequency_days: Optional[int] = None
    last_fertilized_date: Optional[date] = None
    repot_frequency_months: Optional[int] = None
    last_repotted_date: Optional[date] = None
    prune_frequency_months: Optional[int] = None
    last_pruned_date: Optional[date] = None
    notes: Optional[str] = ""
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TrackStatusRead(BaseModel):
    """Schedule of one active care track."""

    track: CareTrack
    due_date: date
    status: CareStatus
    days_overdue: int
    days_until: int


class PlantCareStatus(BaseModel):
    """A plant together with the status of each of its active tracks."""

    plant: PlantRead
    next_watering_date: date
    watering_status: CareStatus
    tracks: list[TrackStatusRead]


class DashboardResponse(BaseModel):
    """Plants grouped into those that need water and those that are fine."""

    today: date
    needs_water: list[PlantCareStatus]
    up_to_date: list[PlantCareStatus]


class BulkCareResponse(BaseModel):
    """Outcome of a bulk water or postpone action."""

    candidates: int
    updated: int
    plants: list[PlantRead]
