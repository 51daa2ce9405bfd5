"""Integration tests for authentication endpoints."""
from __future__ import annotations

import uuid

from fastapi.testclient import TestClient

from app.core.security import create_access_token


def test_user_registration_success(client: TestClient) -> None:
    payload = {
        "email": "Gardener@Example.com",
        "password": "securepassword",
        "name": "Gardener One",
    }

    response = client.post("/api/v1/auth/register", json=payload)

    assert response.status_code == 201
    data = response.json()
    assert uuid.UUID(data["id"])  # Valid UUID string
    assert data["email"] == "gardener@example.com"
    assert data["name"] == "Gardener One"
    assert data["notification_time"] == "09:00"
    assert data["is_active"] is True


def test_user_registration_duplicate_email(client: TestClient) -> None:
    payload = {"email": "duplicate@example.com", "password": "anothersecurepassword"}

    first_response = client.post("/api/v1/auth/register", json=payload)
    assert first_response.status_code == 201

    duplicate_response = client.post("/api/v1/auth/register", json=payload)
    assert duplicate_response.status_code == 400
    assert duplicate_response.json()["detail"] == "A user with this email already exists."


def test_user_registration_rejects_short_password(client: TestClient) -> None:
    response = client.post(
        "/api/v1/auth/register", json={"email": "short@example.com", "password": "abc"}
    )

    assert response.status_code == 422


def test_user_login_success(client: TestClient) -> None:
    client.post(
        "/api/v1/auth/register", json={"email": "login@example.com", "password": "supersecure"}
    )

    response = client.post(
        "/api/v1/auth/login", json={"email": "login@example.com", "password": "supersecure"}
    )

    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert "refresh_token" in data
    assert data["token_type"] == "bearer"


def test_user_login_invalid_credentials(client: TestClient) -> None:
    payload = {
        "email": "unknown@example.com",
        "password": "wrongpassword",
    }
    response = client.post("/api/v1/auth/login", json=payload)

    assert response.status_code == 401
    assert response.json()["detail"] == "Incorrect email or password"


def test_anonymous_registration_returns_recovery_key(client: TestClient) -> None:
    response = client.post("/api/v1/auth/anonymous", json={"name": "Windowsill"})

    assert response.status_code == 201
    data = response.json()
    assert data["token_type"] == "bearer"
    assert uuid.UUID(data["recovery_key"])

    me = client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {data['access_token']}"}
    )
    assert me.status_code == 200
    assert me.json()["email"] is None
    assert me.json()["name"] == "Windowsill"


def test_anonymous_registration_without_body(client: TestClient) -> None:
    response = client.post("/api/v1/auth/anonymous")

    assert response.status_code == 201
    assert response.json()["recovery_key"]


def test_login_with_recovery_key(client: TestClient) -> None:
    anonymous = client.post("/api/v1/auth/anonymous").json()

    response = client.post(
        "/api/v1/auth/login-recovery", json={"recovery_key": anonymous["recovery_key"]}
    )

    assert response.status_code == 200
    token = response.json()["access_token"]
    me = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})
    original = client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {anonymous['access_token']}"}
    )
    assert me.json()["id"] == original.json()["id"]


def test_login_with_unknown_recovery_key(client: TestClient) -> None:
    response = client.post(
        "/api/v1/auth/login-recovery", json={"recovery_key": str(uuid.uuid4())}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid recovery key"


def test_refresh_token_is_not_accepted_as_access_token(client: TestClient) -> None:
    tokens = client.post("/api/v1/auth/anonymous").json()

    response = client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {tokens['refresh_token']}"}
    )

    assert response.status_code == 401


def test_refresh_token_issues_new_pair(client: TestClient) -> None:
    tokens = client.post("/api/v1/auth/anonymous").json()

    response = client.post(
        "/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
    )

    assert response.status_code == 200
    refreshed = response.json()
    assert refreshed["access_token"] != tokens["access_token"]
    me = client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {refreshed['access_token']}"}
    )
    assert me.status_code == 200


def test_refresh_rejects_access_token(client: TestClient) -> None:
    tokens = client.post("/api/v1/auth/anonymous").json()

    wrong_type = client.post(
        "/api/v1/auth/refresh", json={"refresh_token": tokens["access_token"]}
    )
    garbage = client.post("/api/v1/auth/refresh", json={"refresh_token": "not-a-jwt"})

    assert wrong_type.status_code == 401
    assert garbage.status_code == 401
    assert garbage.json()["detail"] == "Invalid refresh token"


def test_health_check(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok"}


def test_invalid_token_is_rejected_with_bearer_challenge(client: TestClient) -> None:
    response = client.get(
        "/api/v1/users/me", headers={"Authorization": "Bearer not-a-token"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Could not validate credentials"
    assert response.headers["www-authenticate"] == "Bearer"


def test_token_for_unknown_user_is_rejected(client: TestClient) -> None:
    token = create_access_token(str(uuid.uuid4()))

    response = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Could not validate credentials"


def test_profile_reports_account_kind(client: TestClient) -> None:
    anonymous = client.post("/api/v1/auth/anonymous").json()
    client.post(
        "/api/v1/auth/register", json={"email": "kind@example.com", "password": "supersecure"}
    )
    email_login = client.post(
        "/api/v1/auth/login", json={"email": "kind@example.com", "password": "supersecure"}
    ).json()

    anonymous_me = client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {anonymous['access_token']}"}
    )
    email_me = client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {email_login['access_token']}"}
    )

    assert anonymous_me.json()["is_anonymous"] is True
    assert email_me.json()["is_anonymous"] is False
