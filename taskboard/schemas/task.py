"""
Task schemas.

``TaskRead`` doubles as the immutable in-memory record held by the board
engine; the request models cover quick-add and inline edits.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskboard.models.task import TaskPriority

InlineField = Literal["title", "status_id", "priority", "due_date", "estimated_hours"]


# ---------------------------------------------------------------------------
# Task record
# ---------------------------------------------------------------------------

class TaskRead(BaseModel):
    """A task as loaded from the store. Mutated only through ``model_copy``."""

    id: UUID
    project_id: UUID
    status_id: UUID | None
    title: str
    description: str | None = None
    priority: TaskPriority = TaskPriority.medium
    due_date: date | None = None
    estimated_hours: float | None = None
    position: int
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True, frozen=True)


# ---------------------------------------------------------------------------
# Quick add
# ---------------------------------------------------------------------------

class TaskQuickAddRequest(BaseModel):
    """Request body for POST /projects/{project_id}/tasks."""

    title: str = Field(min_length=1, max_length=500)
    status_id: UUID | None = None

    @field_validator("title")
    @classmethod
    def title_must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Task title must not be blank")
        return v


# ---------------------------------------------------------------------------
# Inline edit
# ---------------------------------------------------------------------------

class TaskUpdateRequest(BaseModel):
    """Request body for PATCH /tasks/{task_id}. Only sent fields are written."""

    title: str | None = Field(default=None, min_length=1, max_length=500)
    status_id: UUID | None = None
    priority: TaskPriority | None = None
    due_date: date | None = None
    estimated_hours: float | None = Field(default=None, ge=0)

    model_config = ConfigDict(extra="forbid")

    @field_validator("title")
    @classmethod
    def title_must_not_be_blank(cls, v: str | None) -> str | None:
        # An explicit null is rejected by the board service with BLANK_TITLE
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Task title must not be blank")
        return v

    def changes(self) -> dict[str, Any]:
        """Fields explicitly present in the request, including explicit nulls."""
        return self.model_dump(include=self.model_fields_set)


class TaskFieldChange(BaseModel):
    """A single inline edit as sent by the list view."""

    task_id: UUID
    field: InlineField
    value: Any = None

    def as_update(self) -> TaskUpdateRequest:
        return TaskUpdateRequest.model_validate({self.field: self.value})
