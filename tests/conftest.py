"""Pytest fixtures for API and service tests."""

import os
from collections.abc import Generator
from datetime import date, timedelta
from typing import Any

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("SWEEP_SECRET", "test-sweep-secret")
os.environ.setdefault("CARE_TIMEZONE", "UTC")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_care_today, get_db, get_push_channel
from app.db import models  # noqa: F401  # Imported for side effects
from app.db.base import Base
from app.db.models import Plant, PushSubscription, User
from app.main import create_app
from app.services.push_channel import DeliveryResult


FIXED_TODAY = date(2024, 6, 15)


class RecordingChannel:
    """Push channel double that records deliveries instead of sending them."""

    is_configured = True

    def __init__(self) -> None:
        self.sent: list[tuple[str, dict[str, Any]]] = []
        self.results: dict[str, DeliveryResult] = {}
        self.errors: dict[str, Exception] = {}

    def send(self, subscription: Any, payload: dict[str, Any]) -> DeliveryResult:
        endpoint = subscription.endpoint
        if endpoint in self.errors:
            raise self.errors[endpoint]
        self.sent.append((endpoint, payload))
        return self.results.get(endpoint, DeliveryResult(ok=True))

    def endpoints(self) -> list[str]:
        return [endpoint for endpoint, _ in self.sent]


@pytest.fixture(scope="session")
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_tables(db_engine) -> Generator[None, None, None]:
    try:
        yield
    finally:
        with db_engine.begin() as connection:
            for table in reversed(Base.metadata.sorted_tables):
                connection.execute(table.delete())


@pytest.fixture()
def db_session(db_engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def concurrent_session(db_engine) -> Generator[Session, None, None]:
    """A second session on the same engine, standing in for another request."""

    db = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def today() -> date:
    return FIXED_TODAY


@pytest.fixture()
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture()
def client(db_session: Session, today: date, channel: RecordingChannel) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_care_today] = lambda: today
    app.dependency_overrides[get_push_channel] = lambda: channel
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def user_factory(db_session):
    def create(email: str | None = None, notification_time: str = "09:00") -> User:
        user = User(
            email=email,
            hashed_password="not-used" if email else None,
            notification_time=notification_time,
            is_active=True,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return create


@pytest.fixture()
def plant_factory(db_session, today):
    def create(
        owner: User,
        name: str = "Fern",
        water_every: int = 7,
        watered_days_ago: int = 0,
        **extra: Any,
    ) -> Plant:
        plant = Plant(
            user_id=owner.id,
            name=name,
            location="Living room",
            photo_url="https://example.com/plant.jpg",
            water_frequency_days=water_every,
            last_watered_date=today - timedelta(days=watered_days_ago),
            **extra,
        )
        db_session.add(plant)
        db_session.commit()
        db_session.refresh(plant)
        return plant

    return create


@pytest.fixture()
def subscription_factory(db_session):
    def create(owner: User, endpoint: str | None = None) -> PushSubscription:
        sub = PushSubscription(
            user_id=owner.id,
            endpoint=endpoint or f"https://push.example.com/{owner.id}",
            p256dh="test-p256dh-key",
            auth="test-auth-secret",
        )
        db_session.add(sub)
        db_session.commit()
        db_session.refresh(sub)
        return sub

    return create
