"""
Task and board endpoints.

Board and list projections, quick-add, inline edits, delete, duplicate
and one-shot drops.
"""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from taskboard.core.dependencies import get_board_service, get_task_board_service
from taskboard.models.task import TaskPriority
from taskboard.schemas.board import (
    BoardResponse,
    DropRequest,
    DropResponse,
    TaskFilters,
    TaskListResponse,
)
from taskboard.schemas.task import TaskQuickAddRequest, TaskRead, TaskUpdateRequest
from taskboard.services.board_service import BoardService

router = APIRouter()


def get_filters(
    status_id: UUID | None = Query(None, description="Only tasks in this status"),
    priority: TaskPriority | None = Query(None, description="Only tasks with this priority"),
    hide_done: bool = Query(False, description="Hide tasks in done statuses"),
) -> TaskFilters:
    return TaskFilters(status_id=status_id, priority=priority, hide_done=hide_done)


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------

@router.get(
    "/projects/{project_id}/board",
    response_model=BoardResponse,
    summary="Board view: one column per status",
)
async def get_board(
    filters: TaskFilters = Depends(get_filters),
    service: BoardService = Depends(get_board_service),
) -> BoardResponse:
    service.set_filters(filters)
    return service.render_board()


@router.get(
    "/projects/{project_id}/tasks",
    response_model=TaskListResponse,
    summary="List view: every task in position order",
)
async def list_tasks(
    filters: TaskFilters = Depends(get_filters),
    service: BoardService = Depends(get_board_service),
) -> TaskListResponse:
    service.set_filters(filters)
    return service.render_list()


# ---------------------------------------------------------------------------
# Task edits
# ---------------------------------------------------------------------------

@router.post(
    "/projects/{project_id}/tasks",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Quick-add a task at the end of the order",
)
async def quick_add_task(
    data: TaskQuickAddRequest,
    service: BoardService = Depends(get_board_service),
) -> TaskRead:
    return await service.on_quick_add(data.title, data.status_id)


@router.patch(
    "/tasks/{task_id}",
    response_model=TaskRead,
    summary="Edit task fields inline",
)
async def update_task(
    task_id: UUID,
    data: TaskUpdateRequest,
    service: BoardService = Depends(get_task_board_service),
) -> TaskRead:
    return await service.update_task(task_id, data)


@router.delete(
    "/tasks/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
)
async def delete_task(
    task_id: UUID,
    service: BoardService = Depends(get_task_board_service),
) -> Response:
    await service.on_delete_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/tasks/{task_id}/duplicate",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Duplicate a task at the end of the order",
)
async def duplicate_task(
    task_id: UUID,
    service: BoardService = Depends(get_task_board_service),
) -> TaskRead:
    return await service.on_duplicate_task(task_id)


# ---------------------------------------------------------------------------
# Drop
# ---------------------------------------------------------------------------

@router.post(
    "/projects/{project_id}/board/drop",
    response_model=DropResponse,
    summary="Drop a dragged task on a card or a status column",
)
async def drop_task(
    data: DropRequest,
    service: BoardService = Depends(get_board_service),
) -> DropResponse:
    """
    A complete drag in one request. The resulting task order is returned
    so the client can render what the store now holds.
    """
    service.set_view(data.view)
    outcome = await service.drop(data.active_id, data.over_id)
    return DropResponse(outcome=outcome.to_response(), tasks=service.tasks.tasks)
