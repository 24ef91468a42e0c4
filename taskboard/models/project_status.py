"""
ProjectStatus ORM model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskboard.models.base import Base, CreatedAtMixin, PositionMixin, UUIDMixin

if TYPE_CHECKING:
    from taskboard.models.project import Project
    from taskboard.models.task import Task


class ProjectStatus(Base, UUIDMixin, PositionMixin, CreatedAtMixin):
    """Represents a status column within a project (e.g. In Progress, Done)."""

    __tablename__ = "project_statuses"

    project_id: Mapped[UUID] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    color: Mapped[str] = mapped_column(String(7), nullable=False)
    is_done_status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    project: Mapped[Project] = relationship("Project", back_populates="statuses")
    tasks: Mapped[list[Task]] = relationship("Task", back_populates="status")

    def __repr__(self) -> str:
        return f"<ProjectStatus id={self.id} name={self.name!r} project_id={self.project_id}>"
