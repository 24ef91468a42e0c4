"""
Persistence contracts consumed by the board engine.

The engine only depends on these protocols; ``SqlTaskStore`` and
``SqlStatusStore`` are the production implementations.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import Any, AsyncIterator, Protocol, Sequence
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskboard.core.exceptions import StoreError
from taskboard.models.task import TaskPriority
from taskboard.schemas.status import StatusPayload, StatusRead
from taskboard.schemas.task import TaskRead

logger = logging.getLogger(__name__)


class TaskStore(Protocol):
    async def list_tasks(self, project_id: UUID) -> list[TaskRead]:
        """All tasks of the project ordered by position ascending."""
        ...

    async def update_task(self, task_id: UUID, fields: dict[str, Any]) -> None: ...

    async def update_task_position(self, task_id: UUID, position: int) -> None: ...

    async def create_task(
        self,
        project_id: UUID,
        status_id: UUID | None,
        title: str,
        position: int,
        *,
        priority: TaskPriority = TaskPriority.medium,
        description: str | None = None,
        due_date: date | None = None,
        estimated_hours: float | None = None,
    ) -> TaskRead: ...

    async def delete_task(self, task_id: UUID) -> None: ...


class StatusStore(Protocol):
    async def list_statuses(
        self, project_id: UUID, user_id: UUID | None = None
    ) -> list[StatusRead]:
        """Statuses ordered by position; scoped to the owner when ``user_id`` is given."""
        ...

    async def replace_all(
        self, project_id: UUID, statuses: Sequence[StatusPayload]
    ) -> list[StatusRead]:
        """Delete every status of the project, then insert ``statuses``."""
        ...

    async def create_defaults(
        self, project_id: UUID, defaults: Sequence[StatusPayload]
    ) -> list[StatusRead]: ...


class SqlStore:
    """Shared session handling: one short unit of work per store call."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def unit_of_work(self, operation: str) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.warning("Store operation %s failed: %s", operation, exc)
                raise StoreError(f"Could not {operation}") from exc
