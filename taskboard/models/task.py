"""
Task ORM model.
"""

from __future__ import annotations

import enum
from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Date, Enum, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskboard.models.base import Base, CreatedAtMixin, PositionMixin, UUIDMixin

if TYPE_CHECKING:
    from taskboard.models.project import Project
    from taskboard.models.project_status import ProjectStatus


class TaskPriority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


class Task(Base, UUIDMixin, PositionMixin, CreatedAtMixin):
    """Represents a work item within a project."""

    __tablename__ = "tasks"

    project_id: Mapped[UUID] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Nullable: tasks whose status was deleted stay in the list view only
    status_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("project_statuses.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    priority: Mapped[TaskPriority] = mapped_column(
        Enum(TaskPriority, name="task_priority"),
        nullable=False,
        default=TaskPriority.medium,
    )
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    estimated_hours: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Relationships
    project: Mapped[Project] = relationship("Project", back_populates="tasks")
    status: Mapped[ProjectStatus | None] = relationship(
        "ProjectStatus", back_populates="tasks"
    )

    def __repr__(self) -> str:
        return f"<Task id={self.id} position={self.position} project_id={self.project_id}>"
