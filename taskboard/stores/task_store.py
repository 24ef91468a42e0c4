"""
SQLAlchemy-backed task store.
"""

from __future__ import annotations

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select, update

from taskboard.core.exceptions import NotFoundError
from taskboard.models.task import Task, TaskPriority
from taskboard.schemas.task import TaskRead
from taskboard.stores.base import SqlStore

UPDATABLE_FIELDS = frozenset(
    {"title", "description", "status_id", "priority", "due_date", "estimated_hours"}
)


class SqlTaskStore(SqlStore):
    """Task CRUD for the board. Every call commits on its own."""

    async def list_tasks(self, project_id: UUID) -> list[TaskRead]:
        async with self.unit_of_work("list tasks") as session:
            result = await session.execute(
                select(Task)
                .where(Task.project_id == project_id)
                .order_by(Task.position, Task.created_at)
            )
            return [TaskRead.model_validate(t) for t in result.scalars().all()]

    async def update_task(self, task_id: UUID, fields: dict[str, Any]) -> None:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not updatable through update_task: {sorted(unknown)}")
        if not fields:
            return
        async with self.unit_of_work("update task") as session:
            result = await session.execute(
                update(Task).where(Task.id == task_id).values(**fields)
            )
            if result.rowcount == 0:
                raise NotFoundError("Task not found", code="TASK_NOT_FOUND")

    async def update_task_position(self, task_id: UUID, position: int) -> None:
        async with self.unit_of_work("update task position") as session:
            result = await session.execute(
                update(Task).where(Task.id == task_id).values(position=position)
            )
            if result.rowcount == 0:
                raise NotFoundError("Task not found", code="TASK_NOT_FOUND")

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
    ) -> TaskRead:
        async with self.unit_of_work("create task") as session:
            task = Task(
                project_id=project_id,
                status_id=status_id,
                title=title,
                position=position,
                priority=priority,
                description=description,
                due_date=due_date,
                estimated_hours=estimated_hours,
            )
            session.add(task)
            await session.flush()
            await session.refresh(task)
            return TaskRead.model_validate(task)

    async def delete_task(self, task_id: UUID) -> None:
        async with self.unit_of_work("delete task") as session:
            result = await session.execute(delete(Task).where(Task.id == task_id))
            if result.rowcount == 0:
                raise NotFoundError("Task not found", code="TASK_NOT_FOUND")
