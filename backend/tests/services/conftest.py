"""Service test fixtures — async DB, PostManager and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB
    - db_manager patched so readiness probes see the test engine
    - TickingClock returns strictly increasing UTC timestamps

Design Decisions:
    - SQLite in-memory: fast, no external dependency; unique constraints and
      rowcounts behave like PostgreSQL for what these tests exercise
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from app.core.domain_types import Requester, UserId
from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.infrastructure.post_repository import SqlAlchemyPostRepository
from app.services.post_manager import PostManager
import app.infrastructure.database as db_module
import app.models  # noqa: F401
from app.main import app


class TickingClock:
    """Deterministic clock: each call advances by one second."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


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
def clock():
    return TickingClock()


@pytest.fixture
def requester():
    return Requester(id=UserId(uuid.uuid4()))


@pytest.fixture
def repository(test_db):
    return SqlAlchemyPostRepository(test_db)


@pytest.fixture
def manager(repository, clock):
    """PostManager over the SQLite repository with a ticking clock."""
    return PostManager(repository, clock=clock)


@pytest.fixture
def auth_headers():
    return {"X-User-Id": str(uuid.uuid4())}


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
