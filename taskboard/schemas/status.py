"""
Project status schemas.

Request/response models for status listing, the status editor draft,
templates and copy-from-project.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class StatusRead(BaseModel):
    """A persisted status column."""

    id: UUID
    project_id: UUID
    name: str
    color: str
    is_done_status: bool
    position: int

    model_config = ConfigDict(from_attributes=True, frozen=True)


class StatusPayload(BaseModel):
    """The fields written when statuses are (re)inserted for a project."""

    name: str = Field(min_length=1, max_length=100)
    color: str = Field(pattern="^#[0-9A-Fa-f]{6}$")
    is_done_status: bool = False
    position: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)


class StatusListResponse(BaseModel):
    """Response for GET /projects/{project_id}/statuses."""

    statuses: list[StatusRead]
    total: int


# ---------------------------------------------------------------------------
# Editor draft
# ---------------------------------------------------------------------------

class StatusDraftItem(BaseModel):
    """One editable row of the status editor."""

    key: str | None = None
    id: UUID | None = None
    name: str = Field(max_length=100)
    color: str
    is_done_status: bool = False
    position: int = Field(default=0, ge=0)


class StatusDraftResponse(BaseModel):
    statuses: list[StatusDraftItem]


class StatusSaveRequest(BaseModel):
    """Request body for PUT /projects/{project_id}/statuses."""

    statuses: list[StatusDraftItem]


# ---------------------------------------------------------------------------
# Templates and copy sources
# ---------------------------------------------------------------------------

class StatusTemplateResponse(BaseModel):
    name: str
    statuses: list[StatusPayload]


class StatusTemplateListResponse(BaseModel):
    templates: list[StatusTemplateResponse]


class CopySourceItem(BaseModel):
    id: UUID
    name: str

    model_config = ConfigDict(from_attributes=True)


class CopySourceListResponse(BaseModel):
    projects: list[CopySourceItem]
