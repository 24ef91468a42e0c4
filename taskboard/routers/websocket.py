"""
WebSocket endpoint.
A live board view: one BoardService per connection, driven by drag and
edit messages from the client.
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from taskboard.core.dependencies import (
    ProjectFinder,
    get_project_finder,
    get_status_store,
    get_task_store,
)
from taskboard.core.exceptions import NotFoundError, StoreError, TaskboardError
from taskboard.core.websocket import manager
from taskboard.schemas.board import ViewMode
from taskboard.schemas.session import (
    ClientMessage,
    DragCancelMessage,
    DragEndMessage,
    DragOverMessage,
    DragStartMessage,
    FieldChangeMessage,
    QuickAddMessage,
    SetFiltersMessage,
    SetViewMessage,
    client_message_adapter,
)
from taskboard.services.board_service import BoardService
from taskboard.stores.status_store import SqlStatusStore
from taskboard.stores.task_store import SqlTaskStore

logger = logging.getLogger(__name__)

router = APIRouter()

# Close codes
PROJECT_NOT_FOUND_CLOSE_CODE = 4404
LOAD_FAILED_CLOSE_CODE = 1011


def board_message(service: BoardService) -> dict:
    view = service.render_board() if service.view is ViewMode.board else service.render_list()
    return {
        "type": "board",
        "view": service.view.value,
        "data": view.model_dump(mode="json"),
    }


def notice_message(message: str) -> dict:
    return {"type": "notice", "message": message}


def error_message(detail: dict) -> dict:
    return {"type": "error", "detail": detail}


async def handle_message(service: BoardService, message: ClientMessage) -> str | None:
    """Apply one client message. Returns a notice for the user, if any."""
    if isinstance(message, DragStartMessage):
        service.on_drag_start(message.id)
    elif isinstance(message, DragOverMessage):
        service.on_drag_over(message.target_id)
    elif isinstance(message, DragEndMessage):
        outcome = await service.on_drag_end(message.target_id)
        return outcome.notice
    elif isinstance(message, DragCancelMessage):
        service.on_drag_cancel()
    elif isinstance(message, QuickAddMessage):
        await service.on_quick_add(message.title, message.status_id)
    elif isinstance(message, FieldChangeMessage):
        await service.on_inline_field_change(message.task_id, message.field, message.value)
    elif isinstance(message, SetFiltersMessage):
        service.set_filters(message.filters)
    elif isinstance(message, SetViewMessage):
        service.set_view(message.view)
    return None


@router.websocket("/ws/projects/{project_id}/board")
async def board_websocket(
    websocket: WebSocket,
    project_id: UUID,
    find_project: ProjectFinder = Depends(get_project_finder),
    task_store: SqlTaskStore = Depends(get_task_store),
    status_store: SqlStatusStore = Depends(get_status_store),
) -> None:
    """
    Connect: WS /api/v1/ws/projects/{project_id}/board

    On connect:
    - Resolve the project, close with 4404 if it does not exist
    - Register the connection (replacing any previous view of the project)
    - Load the board and send the first ``board`` snapshot

    Per message, in arrival order:
    - Apply it to the board service
    - Send ``notice`` for recovered persistence failures, ``error`` for
      rejected actions, then a fresh ``board`` snapshot
    """
    try:
        project = await find_project(project_id)
    except NotFoundError:
        await websocket.close(code=PROJECT_NOT_FOUND_CLOSE_CODE)
        return

    await manager.connect(project_id, websocket)

    try:
        try:
            service = await BoardService.open(
                project.id, task_store, status_store, user_id=project.user_id
            )
        except StoreError as exc:
            logger.error("Could not load board for project_id=%s: %s", project_id, exc)
            await manager.send(project_id, websocket, error_message(exc.to_detail()))
            await websocket.close(code=LOAD_FAILED_CLOSE_CODE)
            return

        if not await manager.send(project_id, websocket, board_message(service)):
            return

        while True:
            raw = await websocket.receive_text()
            try:
                message = client_message_adapter.validate_json(raw)
            except ValidationError as exc:
                detail = {"code": "INVALID_MESSAGE", "message": str(exc.errors()[0]["msg"])}
                if not await manager.send(project_id, websocket, error_message(detail)):
                    return
                continue

            reply: dict | None = None
            try:
                notice = await handle_message(service, message)
                if notice:
                    reply = notice_message(notice)
            except StoreError as exc:
                reply = notice_message(exc.message)
            except TaskboardError as exc:
                logger.debug("Rejected %s for project_id=%s: %s", message.type, project_id, exc)
                reply = error_message(exc.to_detail())

            if reply is not None and not await manager.send(project_id, websocket, reply):
                return
            if not await manager.send(project_id, websocket, board_message(service)):
                return

    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(project_id, websocket)
