import os
from collections.abc import AsyncGenerator

# Tests run against an in-memory SQLite database with caching disabled.
# These must be set before the app modules read their settings.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CACHE_ENABLED"] = "false"
os.environ.setdefault("LOG_FORMAT", "console")

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Load environment variables from .env file
load_dotenv()

from app.database import get_db
from app.dependencies import get_cache_manager
from app.main import app
from app.models import combined_metadata

metadata = combined_metadata()

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh in-memory database and session for one test."""
    # StaticPool keeps the single in-memory connection alive across sessions
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    session_factory = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    await test_engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache_manager] = lambda: None

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def sample_appointment_data() -> dict:
    """Sample appointment booking payload."""
    return {
        "patientId": "P1",
        "doctorId": "D1",
        "department": "Cardiology",
        "date": "2024-06-01",
        "timeSlot": "09:00-09:30",
        "patientDetails": {
            "fullName": "Jane Roe",
            "email": "  Jane.Roe@Example.COM ",
            "phone": "+1 555 0100",
        },
    }


@pytest.fixture
def make_appointment(sample_appointment_data: dict):
    """Build a booking payload with selected fields overridden."""

    def _make(**overrides) -> dict:
        data = {
            **sample_appointment_data,
            "patientDetails": dict(sample_appointment_data["patientDetails"]),
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def sample_coverage_application_data() -> dict:
    """Sample coverage application payload."""
    return {
        "userId": "U1",
        "patientName": "Jane Roe",
        "patientEmail": "Jane.Roe@Example.com",
        "policyId": "POL-123",
        "provider": "Acme Health",
        "coverageType": "Emergency Only",
    }
