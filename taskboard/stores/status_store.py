"""
SQLAlchemy-backed project status store.
"""

from __future__ import annotations

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, select, update

from taskboard.core.exceptions import PartialReplaceError, StoreError
from taskboard.models.project import Project
from taskboard.models.project_status import ProjectStatus
from taskboard.models.task import Task
from taskboard.schemas.status import CopySourceItem, StatusPayload, StatusRead
from taskboard.stores.base import SqlStore

logger = logging.getLogger(__name__)


class SqlStatusStore(SqlStore):
    """Status reads plus the two bulk write paths (seed, replace)."""

    async def list_statuses(
        self, project_id: UUID, user_id: UUID | None = None
    ) -> list[StatusRead]:
        stmt = select(ProjectStatus).where(ProjectStatus.project_id == project_id)
        if user_id is not None:
            stmt = stmt.join(Project, ProjectStatus.project_id == Project.id).where(
                Project.user_id == user_id
            )
        async with self.unit_of_work("list statuses") as session:
            result = await session.execute(stmt.order_by(ProjectStatus.position))
            return [StatusRead.model_validate(s) for s in result.scalars().all()]

    async def create_defaults(
        self, project_id: UUID, defaults: Sequence[StatusPayload]
    ) -> list[StatusRead]:
        async with self.unit_of_work("create default statuses") as session:
            return await self._insert(session, project_id, defaults)

    async def replace_all(
        self, project_id: UUID, statuses: Sequence[StatusPayload]
    ) -> list[StatusRead]:
        """
        Destructive replace: delete, then insert, as two separate commits.

        If the insert fails the project is left with no statuses and
        ``PartialReplaceError`` is raised so the caller can offer a retry.
        """
        async with self.unit_of_work("delete statuses") as session:
            await session.execute(
                update(Task).where(Task.project_id == project_id).values(status_id=None)
            )
            await session.execute(
                delete(ProjectStatus).where(ProjectStatus.project_id == project_id)
            )

        try:
            async with self.unit_of_work("insert statuses") as session:
                return await self._insert(session, project_id, statuses)
        except StoreError as exc:
            logger.error("Statuses of project %s deleted but not re-inserted", project_id)
            raise PartialReplaceError(
                "Statuses were removed but the new set could not be saved"
            ) from exc

    async def list_copy_sources(self, project_id: UUID, user_id: UUID) -> list[CopySourceItem]:
        """Other projects of the same owner, by name."""
        async with self.unit_of_work("list copy sources") as session:
            result = await session.execute(
                select(Project)
                .where(Project.user_id == user_id, Project.id != project_id)
                .order_by(Project.name)
            )
            return [CopySourceItem.model_validate(p) for p in result.scalars().all()]

    async def _insert(self, session, project_id: UUID, statuses: Sequence[StatusPayload]) -> list[StatusRead]:
        rows = [
            ProjectStatus(
                project_id=project_id,
                name=s.name,
                color=s.color,
                is_done_status=s.is_done_status,
                position=i,
            )
            for i, s in enumerate(statuses)
        ]
        session.add_all(rows)
        await session.flush()
        return [StatusRead.model_validate(r) for r in rows]
