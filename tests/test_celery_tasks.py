"""Tests for Celery background tasks."""
from __future__ import annotations

from unittest.mock import patch

import pytest
from sqlalchemy.orm import sessionmaker

from app.celery_app import celery_app
from app.db.models import PushSubscription
from app.tasks.notifications import send_care_reminders


@pytest.fixture()
def task_session_factory(db_session):
    factory = sessionmaker(autocommit=False, autoflush=False, bind=db_session.bind)
    sessions: list = []

    def create_session():
        session = factory()
        sessions.append(session)
        return session

    try:
        yield create_session
    finally:
        for session in sessions:
            session.close()


def test_send_care_reminders(
    db_session, task_session_factory, channel, user_factory, plant_factory, subscription_factory
):
    thirsty = user_factory("thirsty@example.com")
    content = user_factory("content@example.com")
    plant_factory(thirsty, name="Fern", water_every=7, watered_days_ago=8)
    plant_factory(content, name="Cactus", water_every=30, watered_days_ago=2)
    subscription_factory(thirsty)
    subscription_factory(content)

    with patch("app.tasks.notifications.SessionLocal", side_effect=task_session_factory), patch(
        "app.tasks.notifications.WebPushChannel", return_value=channel
    ):
        result = send_care_reminders.run("2024-06-15", False)

    assert result["date"] == "2024-06-15"
    assert result["notified"] == 1
    assert result["notified_user_ids"] == [str(thirsty.id)]
    assert result["skipped_user_ids"] == [str(content.id)]
    assert channel.sent[0][1]["body"] == "Water: Fern"


def test_send_care_reminders_prunes_gone_subscriptions(
    db_session, task_session_factory, channel, user_factory, plant_factory, subscription_factory
):
    from app.services.push_channel import DeliveryResult

    owner = user_factory("gone@example.com")
    plant_factory(owner, water_every=2, watered_days_ago=3)
    sub = subscription_factory(owner, endpoint="https://push.example.com/expired")
    sub_id = sub.id
    channel.results["https://push.example.com/expired"] = DeliveryResult(
        ok=False, permanently_invalid=True, status_code=410
    )

    with patch("app.tasks.notifications.SessionLocal", side_effect=task_session_factory), patch(
        "app.tasks.notifications.WebPushChannel", return_value=channel
    ):
        result = send_care_reminders.run("2024-06-15", False)

    assert result["removed_subscription_ids"] == [str(sub_id)]
    db_session.expire_all()
    assert db_session.get(PushSubscription, sub_id) is None


def test_send_care_reminders_skipped_without_vapid(task_session_factory, channel):
    channel.is_configured = False

    with patch("app.tasks.notifications.SessionLocal", side_effect=task_session_factory), patch(
        "app.tasks.notifications.WebPushChannel", return_value=channel
    ):
        result = send_care_reminders.run("2024-06-15", False)

    assert result == {"date": "2024-06-15", "notified": 0, "skipped": True}
    assert channel.sent == []


def test_beat_schedule_runs_hourly():
    entry = celery_app.conf.beat_schedule["send-care-reminders"]

    assert entry["task"] == "app.tasks.notifications.send_care_reminders"
    assert entry["schedule"].minute == {0}
