"""Tests for care due-date arithmetic."""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from app.core.care_clock import (
    CareStatus,
    CareTrack,
    FrequencyUnit,
    add_months,
    care_timezone,
    classify,
    days_overdue,
    days_until,
    next_due,
    plant_schedules,
    to_care_date,
    track_schedule,
)


TODAY = date(2024, 6, 15)


def make_plant(**overrides):
    fields = {
        "id": "p1",
        "name": "Fern",
        "water_frequency_days": 7,
        "last_watered_date": TODAY,
        "fertilize_frequency_days": None,
        "last_fertilized_date": None,
        "repot_frequency_months": None,
        "last_repotted_date": None,
        "prune_frequency_months": None,
        "last_pruned_date": None,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


@pytest.mark.parametrize("frequency", [1, 3, 7, 30, 365])
def test_next_due_is_due_today_after_frequency_days(frequency: int) -> None:
    last = date(2024, 2, 27)
    due = next_due(last, frequency, FrequencyUnit.DAYS)

    assert classify(due, last + timedelta(days=frequency)) is CareStatus.DUE_TODAY


def test_classify_is_ternary() -> None:
    due = date(2024, 6, 10)

    assert classify(due, date(2024, 6, 9)) is CareStatus.UPCOMING
    assert classify(due, date(2024, 6, 10)) is CareStatus.DUE_TODAY
    assert classify(due, date(2024, 6, 11)) is CareStatus.OVERDUE


def test_add_months_clamps_to_month_end() -> None:
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
    assert add_months(date(2024, 3, 31), 1) == date(2024, 4, 30)
    assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)
    assert add_months(date(2024, 8, 31), 18) == date(2026, 2, 28)


def test_next_due_months() -> None:
    assert next_due(date(2024, 1, 31), 1, FrequencyUnit.MONTHS) == date(2024, 2, 29)
    assert next_due(date(2024, 6, 15), 12, FrequencyUnit.MONTHS) == date(2025, 6, 15)


def test_overdue_plant_reports_days_overdue() -> None:
    plant = make_plant(water_frequency_days=7, last_watered_date=TODAY - timedelta(days=8))

    schedule = track_schedule(plant, CareTrack.WATER, TODAY)

    assert schedule is not None
    assert schedule.status is CareStatus.OVERDUE
    assert schedule.days_overdue == 1
    assert schedule.days_overdue == (TODAY - schedule.due_date).days


def test_due_today_scenario() -> None:
    plant = make_plant(water_frequency_days=3, last_watered_date=TODAY - timedelta(days=3))

    schedule = track_schedule(plant, CareTrack.WATER, TODAY)

    assert schedule.status is CareStatus.DUE_TODAY
    assert schedule.days_overdue == 0
    assert schedule.days_until == 0


def test_day_differences_are_never_negative() -> None:
    assert days_overdue(date(2024, 6, 20), TODAY) == 0
    assert days_until(date(2024, 6, 20), TODAY) == 5
    assert days_until(date(2024, 6, 10), TODAY) == 0


def test_half_configured_track_is_inert() -> None:
    only_frequency = make_plant(fertilize_frequency_days=14)
    only_date = make_plant(last_pruned_date=date(2020, 1, 1))

    assert track_schedule(only_frequency, CareTrack.FERTILIZE, TODAY) is None
    assert track_schedule(only_date, CareTrack.PRUNE, TODAY) is None
    assert [item.track for item in plant_schedules(only_frequency, TODAY)] == [CareTrack.WATER]


def test_plant_schedules_cover_active_tracks_in_order() -> None:
    plant = make_plant(
        fertilize_frequency_days=14,
        last_fertilized_date=TODAY - timedelta(days=20),
        repot_frequency_months=12,
        last_repotted_date=date(2024, 1, 1),
        prune_frequency_months=6,
        last_pruned_date=date(2023, 12, 15),
    )

    schedules = plant_schedules(plant, TODAY)

    assert [item.track for item in schedules] == list(CareTrack)
    statuses = {item.track: item.status for item in schedules}
    assert statuses[CareTrack.FERTILIZE] is CareStatus.OVERDUE
    assert statuses[CareTrack.REPOT] is CareStatus.UPCOMING
    assert statuses[CareTrack.PRUNE] is CareStatus.DUE_TODAY


def test_to_care_date_uses_care_timezone() -> None:
    late_evening_utc = datetime(2024, 6, 15, 23, 30, tzinfo=timezone.utc)

    assert to_care_date(late_evening_utc, care_timezone("UTC")) == date(2024, 6, 15)
    assert to_care_date(late_evening_utc, care_timezone("Europe/Berlin")) == date(2024, 6, 16)
    assert to_care_date(date(2024, 6, 15), care_timezone("UTC")) == date(2024, 6, 15)
