"""
Pytest configuration for Taskboard tests.

Board fixtures over the fake stores in ``tests.fakes``, an aiosqlite-backed
session factory for the SQL stores, and an httpx client wired to the app
with the database dependencies overridden.
"""

from __future__ import annotations

from uuid import UUID, uuid4

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from taskboard.core.database import get_db, get_session_factory
from taskboard.main import app
from taskboard.models import Base
from taskboard.schemas.status import StatusRead
from taskboard.schemas.task import TaskRead
from tests.fakes import FakeStatusStore, FakeTaskStore, make_status, make_task


def pytest_configure(config):
    """Configure pytest-asyncio mode."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as async"
    )


# ---------------------------------------------------------------------------
# Board fixtures (Backlog / Doing / Done with one task each)
# ---------------------------------------------------------------------------

@pytest.fixture
def project_id() -> UUID:
    return uuid4()


@pytest.fixture
def owner_id() -> UUID:
    return uuid4()


@pytest.fixture
def statuses(project_id: UUID) -> list[StatusRead]:
    return [
        make_status(project_id, "Backlog", 0),
        make_status(project_id, "Doing", 1, color="#3B82F6"),
        make_status(project_id, "Done", 2, done=True, color="#10B981"),
    ]


@pytest.fixture
def tasks(project_id: UUID, statuses: list[StatusRead]) -> list[TaskRead]:
    backlog, doing, done = statuses
    return [
        make_task(project_id, backlog.id, 0, "T1"),
        make_task(project_id, doing.id, 1, "T2"),
        make_task(project_id, done.id, 2, "T3"),
    ]


@pytest.fixture
def task_store(tasks: list[TaskRead]) -> FakeTaskStore:
    return FakeTaskStore(tasks)


@pytest.fixture
def status_store(
    project_id: UUID, owner_id: UUID, statuses: list[StatusRead], task_store: FakeTaskStore
) -> FakeStatusStore:
    return FakeStatusStore(
        {project_id: list(statuses)}, owners={project_id: owner_id}, task_store=task_store
    )


# ---------------------------------------------------------------------------
# SQL fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
