"""Locust scenarios exercising plant care flows under load."""
from __future__ import annotations

import random
from datetime import date, timedelta

from locust import FastHttpUser, between, task


PLANT_NAMES = ["Monstera", "Pothos", "Fern", "Snake Plant", "Basil", "Fiddle Leaf Fig"]
LOCATIONS = ["Living room", "Kitchen", "Bedroom", "Balcony"]


def _plant_payload() -> dict:
    frequency = random.choice([2, 3, 7, 14])
    return {
        "name": random.choice(PLANT_NAMES),
        "location": random.choice(LOCATIONS),
        "photo_url": "https://example.com/plant.jpg",
        "water_frequency_days": frequency,
        "last_watered_date": (date.today() - timedelta(days=random.randint(0, frequency * 2))).isoformat(),
    }


class GardenerUser(FastHttpUser):
    """Simulate a gardener checking the dashboard and watering plants."""

    wait_time = between(1, 3)

    def on_start(self) -> None:
        self.token: str | None = None
        self.plant_ids: list[str] = []
        self._register()
        for _ in range(random.randint(2, 6)):
            self._add_plant()

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def _register(self) -> None:
        response = self.client.post("/api/v1/auth/anonymous", json={}, name="auth:anonymous")
        if response.ok:
            self.token = response.json().get("access_token")

    def _add_plant(self) -> None:
        response = self.client.post(
            "/api/v1/plants",
            json=_plant_payload(),
            headers=self._headers(),
            name="plants:create",
        )
        if response.ok:
            self.plant_ids.append(response.json()["id"])

    @task(5)
    def fetch_dashboard(self) -> None:
        self.client.get("/api/v1/dashboard", headers=self._headers(), name="dashboard:get")

    @task(2)
    def water_single_plant(self) -> None:
        if not self.plant_ids:
            return
        plant_id = random.choice(self.plant_ids)
        self.client.post(
            f"/api/v1/plants/{plant_id}/care/water",
            headers=self._headers(),
            name="plants:care",
        )

    @task(1)
    def water_all(self) -> None:
        self.client.post(
            "/api/v1/dashboard/water-all", headers=self._headers(), name="dashboard:water-all"
        )

    @task(1)
    def postpone_all(self) -> None:
        self.client.post(
            "/api/v1/dashboard/postpone-all", headers=self._headers(), name="dashboard:postpone-all"
        )
