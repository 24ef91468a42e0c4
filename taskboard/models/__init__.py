"""
SQLAlchemy ORM models.

All models imported here to ensure they are registered with Base.metadata.
Import order matters: base models before dependent models.
"""

from taskboard.models.base import Base, CreatedAtMixin, PositionMixin, UUIDMixin
from taskboard.models.project import Project
from taskboard.models.project_status import ProjectStatus
from taskboard.models.task import Task, TaskPriority

__all__ = [
    "Base",
    "CreatedAtMixin",
    "PositionMixin",
    "UUIDMixin",
    "Project",
    "ProjectStatus",
    "Task",
    "TaskPriority",
]
