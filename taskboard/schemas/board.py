"""
Board and list view schemas.

Filters, the rendered projections, and the drop request/outcome.
"""

from __future__ import annotations

import enum
from uuid import UUID

from pydantic import BaseModel, Field

from taskboard.models.task import TaskPriority
from taskboard.schemas.status import StatusRead
from taskboard.schemas.task import TaskRead


class ViewMode(str, enum.Enum):
    board = "board"
    list = "list"


class TaskFilters(BaseModel):
    """Filters shared by both views. ``None`` means "all"."""

    status_id: UUID | None = None
    priority: TaskPriority | None = None
    hide_done: bool = False


# ---------------------------------------------------------------------------
# Board view
# ---------------------------------------------------------------------------

class BoardColumn(BaseModel):
    status: StatusRead
    tasks: list[TaskRead]
    count: int


class BoardResponse(BaseModel):
    """Response for GET /projects/{project_id}/board."""

    project_id: UUID
    columns: list[BoardColumn]
    unassigned_count: int = 0


# ---------------------------------------------------------------------------
# List view
# ---------------------------------------------------------------------------

class ListRow(BaseModel):
    task: TaskRead
    status: StatusRead | None
    is_done: bool


class TaskListResponse(BaseModel):
    """Response for GET /projects/{project_id}/tasks."""

    project_id: UUID
    rows: list[ListRow]
    total: int
    default_status_id: UUID


# ---------------------------------------------------------------------------
# Drop
# ---------------------------------------------------------------------------

class DropRequest(BaseModel):
    """Request body for POST /projects/{project_id}/board/drop."""

    active_id: UUID
    over_id: UUID | None = None
    view: ViewMode = ViewMode.board


class DropOutcomeResponse(BaseModel):
    action: str
    persisted: bool
    writes_attempted: int = 0
    failed_task_ids: list[UUID] = Field(default_factory=list)
    reverted: bool = False
    notice: str | None = None


class DropResponse(BaseModel):
    outcome: DropOutcomeResponse
    tasks: list[TaskRead]
