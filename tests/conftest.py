"""Shared fixtures for the test suite."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from app.db import get_session
from app.main import app


# ---------------------------------------------------------------------------
# Fake DB session (no real Postgres needed)
# ---------------------------------------------------------------------------

class FakeSession:
    """Minimal stand-in for AsyncSession used in endpoint tests."""

    def __init__(self, rows: list[dict[str, Any]] | None = None):
        self._rows = rows or []
        self.executed: list[tuple[str, dict | None]] = []
        self.commits = 0

    async def execute(self, stmt, params=None):
        self.executed.append((str(stmt), params))
        return FakeResult(self._rows)

    async def commit(self):
        self.commits += 1

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


class FakeResult:
    def __init__(self, rows: list[dict[str, Any]]):
        self._rows = rows
        self._keys = list(rows[0].keys()) if rows else []

    def keys(self):
        return self._keys

    def fetchall(self):
        return [tuple(r[k] for k in self._keys) for r in self._rows]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def fake_session():
    """Return a FakeSession with no rows (override _rows in tests if needed)."""
    return FakeSession()


@pytest.fixture()
def override_session(fake_session):
    """Override the FastAPI dependency so no real DB is needed."""
    async def _override():
        yield fake_session

    app.dependency_overrides[get_session] = _override
    yield fake_session
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_session):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Payload builders
# ---------------------------------------------------------------------------

def make_day_data(
    *,
    workouts: list[dict[str, Any]] | None = None,
    steps: str | None = None,
    sleep_hours: str | None = None,
    sleep_minutes: str | None = None,
    cooked: str | None = None,
    restaurant: str | None = None,
    healthiness: str | None = None,
    protein: str | None = None,
    water: str | None = None,
    pages: str | None = None,
    reading_events: list[dict[str, Any]] | None = None,
    calls_friends: str | None = None,
    calls_family: str | None = None,
    social_events: str | None = None,
) -> dict[str, Any]:
    """Build a DayData payload the way the daily log form saves it."""
    return {
        "workouts": {"activities": workouts or [], "stepsText": steps},
        "sleep": {"hoursText": sleep_hours, "minutesText": sleep_minutes},
        "diet": {
            "cookedMealsText": cooked,
            "restaurantMealsText": restaurant,
            "healthinessText": healthiness,
            "proteinText": protein,
            "waterOzText": water,
        },
        "reading": {"events": reading_events or [], "pagesText": pages},
        "community": {
            "callsFriendsText": calls_friends,
            "callsFamilyText": calls_family,
            "socialEventsText": social_events,
        },
    }


def make_workout(minutes: str = "30", seconds: str | None = None, calories: str | None = None) -> dict[str, Any]:
    return {
        "id": "w1",
        "type": "Running",
        "minutesText": minutes,
        "secondsText": seconds,
        "caloriesText": calories,
    }


def make_log_row(date_key: str, **day_fields: Any) -> dict[str, Any]:
    """Helper to build a fake daily_logs row dict."""
    return {"date": date_key, "steps": None, "data": make_day_data(**day_fields)}
