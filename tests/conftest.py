import os
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

# Load environment variables from .env file
load_dotenv()

from app.database import build_engine, get_db
from app.main import app
from app.models import metadata
from app.models.doctor_hospitals import doctor_hospitals
from app.models.doctors import doctors
from app.models.hospitals import hospitals
from app.models.patients import patients
from app.services.appointment_service import utcnow

# Set TEST_DATABASE_URL to run against a server database; it MUST NOT be the
# production one, as every test drops all tables. Without it each test gets a
# throwaway SQLite file.
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")


@pytest_asyncio.fixture
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a test engine with a fresh schema."""
    url = TEST_DATABASE_URL or f"sqlite:///{tmp_path / 'clinic_test.db'}"
    engine = build_engine(url, poolclass=NullPool)

    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
        await conn.run_sync(metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        try:
            yield db_session
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def future_slot() -> datetime:
    """10:00 tomorrow (UTC), always in the future."""
    tomorrow = utcnow() + timedelta(days=1)
    return tomorrow.replace(hour=10, minute=0, second=0, microsecond=0)


@pytest_asyncio.fixture
async def test_hospital(db_session: AsyncSession) -> int:
    """Create a test hospital."""
    result = await db_session.execute(
        insert(hospitals)
        .values(name="Durdans Hospital", address="3 Alfred Place, Colombo 3")
        .returning(hospitals.c.id)
    )
    await db_session.commit()
    return result.scalar_one()


@pytest_asyncio.fixture
async def test_doctor(db_session: AsyncSession, test_hospital: int) -> int:
    """Create a test doctor working at the test hospital."""
    result = await db_session.execute(
        insert(doctors)
        .values(name="Dr. Nimal Perera", specialization="Cardiology", consultation_fee=2500)
        .returning(doctors.c.id)
    )
    doctor_id = result.scalar_one()
    await db_session.execute(
        insert(doctor_hospitals).values(doctor_id=doctor_id, hospital_id=test_hospital)
    )
    await db_session.commit()
    return doctor_id


@pytest_asyncio.fixture
async def test_patient(db_session: AsyncSession) -> int:
    """Create a test patient."""
    result = await db_session.execute(
        insert(patients)
        .values(name="Kamala Silva", contact_number="+94 77 123 4567")
        .returning(patients.c.id)
    )
    await db_session.commit()
    return result.scalar_one()


@pytest.fixture
def sample_patient_data() -> dict:
    """Sample patient registration data."""
    return {
        "name": "Sunil Fernando",
        "date_of_birth": "1985-04-12",
        "contact_number": "+94 71 555 0101",
    }
