"""Shared fixtures: a throwaway SQLite database and a FastAPI test client."""

from __future__ import annotations

import asyncio
import os
import sys
import tempfile
from pathlib import Path
from typing import Awaitable, Callable, TypeVar

import pytest

ROOT = Path(__file__).resolve().parents[1]
_WORK_DIR = Path(tempfile.mkdtemp(prefix="flightdesk-tests-"))
DB_PATH = _WORK_DIR / "flightdesk.db"

# Settings are read at import time, so configure the environment first.
os.environ["DB_DSN"] = f"sqlite+aiosqlite:///{DB_PATH}"
os.environ["DB_SERVERLESS"] = "true"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["RATE_LIMIT_BOOKING_CREATE"] = "3/minute"
os.environ["LOG_FILE"] = str(_WORK_DIR / "app.log")
sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool  # noqa: E402

from flightdesk.main import app  # noqa: E402
from flightdesk.models import Base  # noqa: E402

T = TypeVar("T")
SessionFactory = async_sessionmaker[AsyncSession]


@pytest.fixture
def app_database_url() -> str:
    """Synchronous URL of the database the application under test uses."""

    return f"sqlite:///{DB_PATH}"


@pytest.fixture(autouse=True)
def reset_database(app_database_url):
    """Give every test an empty schema in the application database."""

    engine = create_engine(app_database_url)
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    engine.dispose()
    yield


@pytest.fixture
def client():
    """Test client with startup/shutdown hooks executed."""

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def run_scenario(tmp_path: Path) -> Callable[[Callable[[SessionFactory], Awaitable[T]]], T]:
    """Run an async scenario against its own SQLite file and session factory."""

    db_url = f"sqlite+aiosqlite:///{tmp_path / 'scenario.db'}"

    def _run(scenario: Callable[[SessionFactory], Awaitable[T]]) -> T:
        async def main() -> T:
            engine = create_async_engine(db_url, poolclass=NullPool)
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            factory = async_sessionmaker(engine, expire_on_commit=False)
            try:
                return await scenario(factory)
            finally:
                await engine.dispose()

        return asyncio.run(main())

    return _run


def _flight_payload(**overrides):
    payload = {
        "flightNumber": "JB-101",
        "origin": "JFK",
        "destination": "LAX",
        "departureTime": "2025-03-15T14:00:00Z",
        "arrivalTime": "2025-03-15T18:00:00Z",
        "capacity": 200,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def flight_payload():
    """Factory for valid flight creation bodies."""

    return _flight_payload


@pytest.fixture
def create_flight(client, flight_payload):
    """Create a flight through the API and return its JSON body."""

    def _create(**overrides):
        response = client.post("/api/flights", json=flight_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()

    return _create
