"""
Project business logic.

Handles project creation and lookup. Statuses are seeded lazily the first
time a board is opened.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.exceptions import NotFoundError
from taskboard.models.project import Project
from taskboard.models.task import Task
from taskboard.schemas.project import (
    ProjectCreateRequest,
    ProjectListResponse,
    ProjectResponse,
)


class ProjectService:

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_projects(self, user_id: UUID) -> ProjectListResponse:
        result = await self.db.execute(
            select(Project)
            .where(Project.user_id == user_id)
            .order_by(Project.created_at)
        )
        projects = list(result.scalars().all())
        return ProjectListResponse(
            projects=[ProjectResponse.model_validate(p) for p in projects],
            total=len(projects),
        )

    async def create_project(self, data: ProjectCreateRequest) -> ProjectResponse:
        project = Project(user_id=data.user_id, name=data.name)
        self.db.add(project)
        await self.db.flush()
        await self.db.refresh(project)
        return ProjectResponse.model_validate(project)

    async def get_project(self, project_id: UUID) -> ProjectResponse:
        return ProjectResponse.model_validate(await self._get_or_404(project_id))

    async def _get_or_404(self, project_id: UUID) -> Project:
        result = await self.db.execute(select(Project).where(Project.id == project_id))
        project = result.scalar_one_or_none()
        if project is None:
            raise NotFoundError("Project not found", code="PROJECT_NOT_FOUND")
        return project

    async def get_task_project(self, task_id: UUID) -> ProjectResponse:
        """The project a task belongs to, for routes addressed by task id."""
        result = await self.db.execute(
            select(Project).join(Task, Task.project_id == Project.id).where(Task.id == task_id)
        )
        project = result.scalar_one_or_none()
        if project is None:
            raise NotFoundError("Task not found", code="TASK_NOT_FOUND")
        return ProjectResponse.model_validate(project)
