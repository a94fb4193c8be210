"""Root conftest — shared test configuration and DB/API fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - app.state.db_manager points at the test engine for probes that bypass get_db

Design Decisions:
    - SQLite in-memory via aiosqlite: fast, no external dependency; the unique
      constraint and RETURNING behave the same as on PostgreSQL for these tests
"""

import os

# Keep tests off any real database before app modules read settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.exc import OperationalError  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, async_sessionmaker, create_async_engine,
)

import app.models  # noqa: E402,F401
from app.core.validate_fields import subtract_months  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.infrastructure.database import DatabaseSessionManager, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.services.employee_repository import SqlEmployeeRepository  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def repository(test_db):
    return SqlEmployeeRepository(test_db)


@pytest.fixture
def fake_manager(test_engine, test_session_factory):
    """DatabaseSessionManager wired to the test engine without building a pool."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
async def client(test_session_factory, fake_manager):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with fake_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    original_manager = getattr(app.state, "db_manager", None)
    app.state.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.db_manager = original_manager


@pytest.fixture
def today() -> date:
    return date.today()


@pytest.fixture
def valid_payload(today):
    """POST body that passes every rule."""
    return {
        "name": "John Doe",
        "empId": "ATS0001",
        "email": "john.doe@astrolitetech.com",
        "role": "Developer",
        "joiningDate": today.isoformat(),
        "training": True,
        "projectStatus": "in-project",
        "projectName": "Apollo Project",
    }


@pytest.fixture
def valid_fields(today):
    """Storage-named fields that pass every rule."""
    return {
        "name": "Jane Smith",
        "emp_id": "ATS0042",
        "email": "jane_smith@astrolitetech.com",
        "role": "Tester",
        "joining_date": subtract_months(today, 1).isoformat(),
        "training": False,
        "project_status": "bench",
        "project_name": None,
    }


class BrokenSession:
    """AsyncSession stand-in whose every statement fails like a lost connection."""

    def __init__(self):
        self.rollbacks = 0

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, ConnectionError("connection lost"))

    async def commit(self):
        raise OperationalError("COMMIT", {}, ConnectionError("connection lost"))

    def add(self, obj):
        pass

    async def rollback(self):
        self.rollbacks += 1


@pytest.fixture
def broken_session():
    return BrokenSession()
