"""
FastAPI dependency injection functions.

Provides store adapters, the project service, and per-request board
services resolved from a project or task id.
"""

from __future__ import annotations

from typing import Awaitable, Callable
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskboard.core.database import get_db, get_session_factory
from taskboard.schemas.board import ViewMode
from taskboard.schemas.project import ProjectResponse
from taskboard.services.board_service import BoardService
from taskboard.services.project_service import ProjectService
from taskboard.stores.status_store import SqlStatusStore
from taskboard.stores.task_store import SqlTaskStore

# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------

def get_task_store(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> SqlTaskStore:
    return SqlTaskStore(session_factory)


def get_status_store(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> SqlStatusStore:
    return SqlStatusStore(session_factory)


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

def get_project_service(db: AsyncSession = Depends(get_db)) -> ProjectService:
    return ProjectService(db=db)


ProjectFinder = Callable[[UUID], Awaitable[ProjectResponse]]


def get_project_finder(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> ProjectFinder:
    """
    Project lookup that opens its own short session, so websocket
    handlers do not keep one open for the lifetime of the connection.
    """
    async def find(project_id: UUID) -> ProjectResponse:
        async with session_factory() as db:
            return await ProjectService(db).get_project(project_id)

    return find


async def get_project(
    project_id: UUID,
    find: ProjectFinder = Depends(get_project_finder),
) -> ProjectResponse:
    return await find(project_id)


async def get_task_project(
    task_id: UUID,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> ProjectResponse:
    async with session_factory() as db:
        return await ProjectService(db).get_task_project(task_id)


# ---------------------------------------------------------------------------
# Board
# ---------------------------------------------------------------------------

async def get_board_service(
    project: ProjectResponse = Depends(get_project),
    task_store: SqlTaskStore = Depends(get_task_store),
    status_store: SqlStatusStore = Depends(get_status_store),
) -> BoardService:
    """A freshly loaded board for one request."""
    return await BoardService.open(
        project.id, task_store, status_store, user_id=project.user_id
    )


async def get_task_board_service(
    project: ProjectResponse = Depends(get_task_project),
    task_store: SqlTaskStore = Depends(get_task_store),
    status_store: SqlStatusStore = Depends(get_status_store),
) -> BoardService:
    """Same as ``get_board_service`` for routes addressed by task id."""
    return await BoardService.open(
        project.id, task_store, status_store, user_id=project.user_id, view=ViewMode.list
    )
