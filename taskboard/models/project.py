"""
Project ORM model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskboard.models.base import Base, CreatedAtMixin, UUIDMixin

if TYPE_CHECKING:
    from taskboard.models.project_status import ProjectStatus
    from taskboard.models.task import Task


class Project(Base, UUIDMixin, CreatedAtMixin):
    """A client project owning one task board."""

    __tablename__ = "projects"

    user_id: Mapped[UUID] = mapped_column(nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)

    statuses: Mapped[list[ProjectStatus]] = relationship(
        "ProjectStatus", back_populates="project", cascade="all, delete-orphan"
    )
    tasks: Mapped[list[Task]] = relationship(
        "Task", back_populates="project", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Project id={self.id} name={self.name!r} user_id={self.user_id}>"
