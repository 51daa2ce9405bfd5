"""Calendar arithmetic for plant care due dates.

Every comparison happens on whole calendar days. Instants coming from clients
are first converted to the configured care timezone and truncated, so "today"
and "last watered" always share one reference.
"""
from __future__ import annotations

import calendar
import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional
from zoneinfo import ZoneInfo


class CareStatus(str, Enum):
    """Ternary classification of a due date relative to today."""

    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    UPCOMING = "upcoming"


class FrequencyUnit(str, Enum):
    DAYS = "days"
    MONTHS = "months"


class CareTrack(str, Enum):
    """The four independent care schedules a plant can carry."""

    WATER = "water"
    FERTILIZE = "fertilize"
    REPOT = "repot"
    PRUNE = "prune"


@dataclass(frozen=True)
class TrackFields:
    frequency_attr: str
    last_date_attr: str
    unit: FrequencyUnit


TRACK_FIELDS: dict[CareTrack, TrackFields] = {
    CareTrack.WATER: TrackFields("water_frequency_days", "last_watered_date", FrequencyUnit.DAYS),
    CareTrack.FERTILIZE: TrackFields(
        "fertilize_frequency_days", "last_fertilized_date", FrequencyUnit.DAYS
    ),
    CareTrack.REPOT: TrackFields("repot_frequency_months", "last_repotted_date", FrequencyUnit.MONTHS),
    CareTrack.PRUNE: TrackFields("prune_frequency_months", "last_pruned_date", FrequencyUnit.MONTHS),
}

NEEDS_ATTENTION = frozenset({CareStatus.OVERDUE, CareStatus.DUE_TODAY})


def add_months(start: dt.date, months: int) -> dt.date:
    """Add calendar months, clamping to the last day of the target month.

    ``2024-01-31 + 1 month`` is ``2024-02-29``; ``2023-01-31 + 1 month`` is
    ``2023-02-28``.
    """

    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return dt.date(year, month, min(start.day, last_day))


def next_due(last_date: dt.date, frequency: int, unit: FrequencyUnit) -> dt.date:
    """Return the date the next care action is due."""

    if unit is FrequencyUnit.MONTHS:
        return add_months(last_date, frequency)
    return last_date + dt.timedelta(days=frequency)


def classify(due_date: dt.date, today: dt.date) -> CareStatus:
    """Classify a due date as overdue, due today or upcoming."""

    if due_date < today:
        return CareStatus.OVERDUE
    if due_date == today:
        return CareStatus.DUE_TODAY
    return CareStatus.UPCOMING


def days_overdue(due_date: dt.date, today: dt.date) -> int:
    return max((today - due_date).days, 0)


def days_until(due_date: dt.date, today: dt.date) -> int:
    return max((due_date - today).days, 0)


def care_timezone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def to_care_date(value: dt.date | dt.datetime, tz: dt.tzinfo) -> dt.date:
    """Strip the time of day from ``value`` in the care timezone.

    Naive datetimes are taken to already be in the care timezone.
    """

    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


def today_in(tz: dt.tzinfo, now: Optional[dt.datetime] = None) -> dt.date:
    """Return the current calendar day in ``tz``."""

    now = now or dt.datetime.now(dt.timezone.utc)
    return to_care_date(now, tz)


@dataclass(frozen=True)
class TrackSchedule:
    """Computed schedule of one active care track."""

    track: CareTrack
    last_date: dt.date
    frequency: int
    unit: FrequencyUnit
    due_date: dt.date
    status: CareStatus
    today: dt.date

    @property
    def needs_attention(self) -> bool:
        return self.status in NEEDS_ATTENTION

    @property
    def days_overdue(self) -> int:
        return days_overdue(self.due_date, self.today)

    @property
    def days_until(self) -> int:
        return days_until(self.due_date, self.today)


def track_schedule(plant: Any, track: CareTrack, today: dt.date) -> Optional[TrackSchedule]:
    """Evaluate one care track of ``plant``.

    A track only takes part in scheduling when both its frequency and its last
    date are set; otherwise it is inert and ``None`` is returned.
    """

    fields = TRACK_FIELDS[track]
    frequency = getattr(plant, fields.frequency_attr, None)
    last_date = getattr(plant, fields.last_date_attr, None)
    if not frequency or last_date is None:
        return None

    due = next_due(last_date, frequency, fields.unit)
    return TrackSchedule(
        track=track,
        last_date=last_date,
        frequency=frequency,
        unit=fields.unit,
        due_date=due,
        status=classify(due, today),
        today=today,
    )


def plant_schedules(plant: Any, today: dt.date) -> list[TrackSchedule]:
    """Return the schedules of every active track, in track order."""

    schedules = []
    for track in CareTrack:
        schedule = track_schedule(plant, track, today)
        if schedule is not None:
            schedules.append(schedule)
    return schedules


__all__ = [
    "CareStatus",
    "CareTrack",
    "FrequencyUnit",
    "TRACK_FIELDS",
    "TrackSchedule",
    "add_months",
    "care_timezone",
    "classify",
    "days_overdue",
    "days_until",
    "next_due",
    "plant_schedules",
    "to_care_date",
    "today_in",
    "track_schedule",
]
