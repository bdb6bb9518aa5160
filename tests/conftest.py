"""Vigil Maintenance — Pytest Configuration & Fixtures.

Provides an isolated testing environment:
1. A fresh in-memory SQLite database per test (schema from ORM metadata).
2. AsyncClient for testing FastAPI endpoints through ASGITransport.
3. A standalone session for exercising services directly.
4. In-memory repositories for exercising the predictor without a store.

Usage:
    async def test_my_endpoint(client):
        response = await client.get("/equipment")
        assert response.status_code == 200
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from api_server import create_app
from config import DatabaseSettings, LogSettings, Settings
from database import Database
from db.models import Equipment, Prediction, SensorReading
from core.exceptions import StoreError

# =============================================================================
# Settings & Database
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    """Settings pointing at a private in-memory database."""
    return Settings(
        database=DatabaseSettings(url="sqlite+aiosqlite://"),
        log=LogSettings(level="WARNING", format="text"),
    )


@pytest_asyncio.fixture
async def database(settings) -> AsyncGenerator[Database, None]:
    """Initialized database handle with all tables created."""
    database = Database(settings.database)
    await database.init()
    yield database
    await database.shutdown()


@pytest_asyncio.fixture
async def db_session(database) -> AsyncGenerator[AsyncSession, None]:
    """Session for calling services directly."""
    session = database.session()
    yield session
    await session.close()


# =============================================================================
# API Client
# =============================================================================

@pytest.fixture
def app(settings, database):
    return create_app(settings, database=database)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the test app.

    ASGITransport does not run the lifespan; the ``database`` fixture has
    already initialized the handle the app uses.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# =============================================================================
# Data Factories
# =============================================================================

@pytest_asyncio.fixture
async def equipment(db_session) -> Equipment:
    """A stored equipment without readings."""
    item = Equipment(name="Feed Pump #1", type="Pump")
    db_session.add(item)
    await db_session.commit()
    return item


@pytest.fixture
def add_readings(db_session):
    """Factory storing readings for an equipment."""

    async def _add(equipment_id: str, values, reading_type: str = "temperature"):
        readings = [
            SensorReading(equipment_id=equipment_id, type=reading_type, value=value)
            for value in values
        ]
        db_session.add_all(readings)
        await db_session.commit()
        return readings

    return _add


# =============================================================================
# In-memory repositories
# =============================================================================

class FakeSensorRepository:
    """SensorRepository over a dict of equipment_id -> values."""

    def __init__(self, values_by_equipment=None, error: Exception | None = None):
        self.values_by_equipment = values_by_equipment or {}
        self.error = error
        self.calls = 0

    async def get_readings_for_equipment(self, equipment_id):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return [
            SensorReading(equipment_id=equipment_id, type="temperature", value=value)
            for value in self.values_by_equipment.get(equipment_id, [])
        ]


class FakePredictionRepository:
    """PredictionRepository appending to a list."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.saved: list[Prediction] = []

    async def create_prediction(self, prediction):
        if self.fail:
            raise StoreError("create_prediction", "disk full")
        self.saved.append(prediction)
        return prediction


@pytest.fixture
def fake_sensors():
    return FakeSensorRepository


@pytest.fixture
def fake_predictions():
    return FakePredictionRepository
