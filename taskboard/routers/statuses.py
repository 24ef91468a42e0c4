"""
Project status endpoints.

Listing (with default seeding), saving a full editor draft, built-in
templates and copy-from-project.
"""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from taskboard.board.presets import STATUS_TEMPLATES
from taskboard.core.dependencies import get_board_service, get_project, get_status_store
from taskboard.core.exceptions import NotFoundError
from taskboard.schemas.project import ProjectResponse
from taskboard.schemas.status import (
    CopySourceListResponse,
    StatusDraftResponse,
    StatusListResponse,
    StatusSaveRequest,
    StatusTemplateListResponse,
    StatusTemplateResponse,
)
from taskboard.services.board_service import BoardService
from taskboard.services.status_editor import StatusEditor
from taskboard.stores.status_store import SqlStatusStore

router = APIRouter()


@router.get(
    "/projects/{project_id}/statuses",
    response_model=StatusListResponse,
    summary="List project statuses, seeding the defaults for a new project",
)
async def list_statuses(
    project: ProjectResponse = Depends(get_project),
    store: SqlStatusStore = Depends(get_status_store),
) -> StatusListResponse:
    statuses = await StatusEditor(store).list_or_seed_defaults(project.id)
    return StatusListResponse(statuses=statuses, total=len(statuses))


@router.put(
    "/projects/{project_id}/statuses",
    response_model=StatusListResponse,
    summary="Replace the project's statuses with an edited draft",
)
async def save_statuses(
    data: StatusSaveRequest,
    service: BoardService = Depends(get_board_service),
) -> StatusListResponse:
    """
    Destructive save: every existing status is deleted and the draft is
    inserted with positions 0..n-1. Tasks lose their status assignment.
    """
    service.editor.open_items(data.statuses)
    saved = await service.save_statuses()
    return StatusListResponse(statuses=saved, total=len(saved))


@router.get(
    "/status-templates",
    response_model=StatusTemplateListResponse,
    summary="List built-in status templates",
)
async def list_templates() -> StatusTemplateListResponse:
    return StatusTemplateListResponse(
        templates=[
            StatusTemplateResponse(name=name, statuses=list(statuses))
            for name, statuses in STATUS_TEMPLATES.items()
        ]
    )


@router.get(
    "/status-templates/{name}",
    response_model=StatusTemplateResponse,
    summary="Get one built-in status template",
)
async def get_template(name: str) -> StatusTemplateResponse:
    statuses = STATUS_TEMPLATES.get(name)
    if statuses is None:
        raise NotFoundError(f"Unknown status template {name!r}", code="TEMPLATE_NOT_FOUND")
    return StatusTemplateResponse(name=name, statuses=list(statuses))


@router.get(
    "/projects/{project_id}/statuses/copy-sources",
    response_model=CopySourceListResponse,
    summary="List other projects of the same owner to copy statuses from",
)
async def list_copy_sources(
    project: ProjectResponse = Depends(get_project),
    store: SqlStatusStore = Depends(get_status_store),
) -> CopySourceListResponse:
    projects = await store.list_copy_sources(project.id, project.user_id)
    return CopySourceListResponse(projects=projects)


@router.get(
    "/projects/{project_id}/statuses/copy",
    response_model=StatusDraftResponse,
    summary="Build a draft from another project's statuses",
)
async def copy_statuses(
    source_project_id: UUID = Query(..., description="Project to copy from"),
    project: ProjectResponse = Depends(get_project),
    store: SqlStatusStore = Depends(get_status_store),
) -> StatusDraftResponse:
    """
    Nothing is saved. A source without statuses (or owned by someone
    else) returns the project's current statuses unchanged.
    """
    editor = StatusEditor(store, user_id=project.user_id)
    editor.open(await editor.list_or_seed_defaults(project.id))
    draft = await editor.copy_from(source_project_id)
    return StatusDraftResponse(statuses=draft.to_items())
