"""
Board business logic.

``BoardService`` is the owner of one project's task collection and status
set. Every user action on the board or list view enters through one of
its ``on_*`` callbacks.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from pydantic import ValidationError

from taskboard.board.drag_session import DragSessionController
from taskboard.board.status_draft import StatusDraft
from taskboard.board.status_set import StatusSet
from taskboard.board.task_collection import TaskCollection
from taskboard.board.views import board_view, list_view
from taskboard.core.exceptions import (
    InvalidEditError,
    InvariantViolation,
    NotFoundError,
    StatusSaveError,
    TaskboardError,
)
from taskboard.schemas.board import BoardResponse, TaskFilters, TaskListResponse, ViewMode
from taskboard.schemas.status import StatusRead
from taskboard.schemas.task import TaskFieldChange, TaskRead, TaskUpdateRequest
from taskboard.services.reconciler import ReconcileOutcome, Reconciler
from taskboard.services.status_editor import StatusEditor
from taskboard.stores.base import StatusStore, TaskStore

logger = logging.getLogger(__name__)


class BoardService:
    """Handles all board operations for one project view."""

    def __init__(
        self,
        project_id: UUID,
        task_store: TaskStore,
        status_store: StatusStore,
        *,
        user_id: UUID | None = None,
        view: ViewMode = ViewMode.board,
    ) -> None:
        self.project_id = project_id
        self.task_store = task_store
        self.status_store = status_store
        self.editor = StatusEditor(status_store, user_id=user_id)
        self.view = view
        self.filters = TaskFilters()
        self.tasks = TaskCollection(project_id)
        self.statuses: StatusSet | None = None
        self.reconciler = Reconciler(self.tasks, task_store)
        self.drag: DragSessionController | None = None

    @classmethod
    async def open(
        cls,
        project_id: UUID,
        task_store: TaskStore,
        status_store: StatusStore,
        *,
        user_id: UUID | None = None,
        view: ViewMode = ViewMode.board,
    ) -> BoardService:
        service = cls(project_id, task_store, status_store, user_id=user_id, view=view)
        await service.load()
        return service

    async def load(self) -> None:
        """(Re)build both models from the stores, seeding statuses if needed."""
        statuses = await self.editor.list_or_seed_defaults(self.project_id)
        if self.statuses is None:
            self.statuses = StatusSet(self.project_id, statuses)
            self.drag = DragSessionController(
                self.tasks, self.statuses, board=self.view is ViewMode.board
            )
        else:
            self.statuses.replace(statuses)
        self.tasks.replace_all(await self.task_store.list_tasks(self.project_id))

    # -----------------------------------------------------------------------
    # Views
    # -----------------------------------------------------------------------

    def render_board(self) -> BoardResponse:
        return board_view(self.tasks, self._statuses(), self.filters)

    def render_list(self) -> TaskListResponse:
        return list_view(self.tasks, self._statuses(), self.filters)

    def set_filters(self, filters: TaskFilters) -> None:
        self.filters = filters

    def set_view(self, view: ViewMode) -> None:
        drag = self._drag()
        if drag.is_dragging:
            raise InvariantViolation("Cannot switch views during a drag", code="DRAG_IN_PROGRESS")
        self.view = view
        drag.board = view is ViewMode.board

    # -----------------------------------------------------------------------
    # Drag and drop
    # -----------------------------------------------------------------------

    def on_drag_start(self, task_id: UUID) -> bool:
        return self._drag().begin(task_id)

    def on_drag_over(self, target_id: UUID | None) -> None:
        self._drag().update_hover(target_id)

    async def on_drag_end(self, target_id: UUID | None) -> ReconcileOutcome:
        resolution = self._drag().end(target_id)
        logger.debug("Drop on %s resolved to %s", target_id, resolution)
        return await self.reconciler.apply_and_persist(resolution)

    def on_drag_cancel(self) -> None:
        self._drag().cancel()

    async def drop(self, active_id: UUID, over_id: UUID | None) -> ReconcileOutcome:
        """A whole drag in one call, for clients without a live session."""
        if not self.on_drag_start(active_id):
            raise NotFoundError("Task not found", code="TASK_NOT_FOUND")
        return await self.on_drag_end(over_id)

    # -----------------------------------------------------------------------
    # Task edits
    # -----------------------------------------------------------------------

    async def on_quick_add(self, title: str, status_id: UUID | None = None) -> TaskRead:
        """Create a task at the end of the global order."""
        statuses = self._statuses()
        title = title.strip()
        if not title:
            raise InvalidEditError("Task title must not be blank", code="BLANK_TITLE")
        if status_id is None:
            status_id = statuses.first.id
        elif status_id not in statuses:
            raise NotFoundError("Status not found in this project", code="STATUS_NOT_FOUND")

        task = await self.task_store.create_task(
            self.project_id, status_id, title, self.tasks.next_position
        )
        self.tasks.append(task)
        return task

    async def on_inline_field_change(self, task_id: UUID, field: str, value: Any) -> TaskRead:
        try:
            change = TaskFieldChange(task_id=task_id, field=field, value=value)
            data = change.as_update()
        except ValidationError as exc:
            raise InvalidEditError(
                f"Invalid value for {field}: {exc.errors()[0]['msg']}",
                code="INVALID_FIELD",
            ) from exc
        return await self.update_task(task_id, data)

    async def update_task(self, task_id: UUID, data: TaskUpdateRequest) -> TaskRead:
        """Write fields straight to the store, then mirror them in memory."""
        if task_id not in self.tasks:
            raise NotFoundError("Task not found", code="TASK_NOT_FOUND")
        changes = data.changes()
        if "title" in changes and changes["title"] is None:
            raise InvalidEditError("Task title must not be empty", code="BLANK_TITLE")
        if changes.get("status_id") is not None and changes["status_id"] not in self._statuses():
            raise NotFoundError("Status not found in this project", code="STATUS_NOT_FOUND")
        if "priority" in changes and changes["priority"] is None:
            raise InvalidEditError("Priority is required", code="INVALID_FIELD")

        try:
            await self.task_store.update_task(task_id, changes)
        except TaskboardError:
            await self.reconciler.refresh()
            raise
        return self.tasks.update_fields(task_id, **changes)

    async def on_delete_task(self, task_id: UUID) -> None:
        if task_id not in self.tasks:
            raise NotFoundError("Task not found", code="TASK_NOT_FOUND")
        await self.task_store.delete_task(task_id)
        self.tasks.remove(task_id)

    async def on_duplicate_task(self, task_id: UUID) -> TaskRead:
        source = self.tasks.get(task_id)
        if source is None:
            raise NotFoundError("Task not found", code="TASK_NOT_FOUND")
        copy = await self.task_store.create_task(
            self.project_id,
            source.status_id,
            f"{source.title} (copy)",
            self.tasks.next_position,
            priority=source.priority,
            description=source.description,
            due_date=source.due_date,
            estimated_hours=source.estimated_hours,
        )
        self.tasks.append(copy)
        return copy

    # -----------------------------------------------------------------------
    # Status editing
    # -----------------------------------------------------------------------

    def on_edit_statuses(self) -> StatusDraft:
        return self.editor.open(self._statuses().statuses)

    async def save_statuses(self) -> list[StatusRead]:
        """
        Persist the open draft and reload the tasks, whose status ids were
        cleared by the replace. On failure the in-memory set is kept.
        """
        try:
            saved = await self.editor.save(self.project_id)
        except StatusSaveError as exc:
            logger.error(
                "Saving statuses for project %s failed (statuses lost: %s)",
                self.project_id,
                exc.statuses_lost,
            )
            raise
        self._statuses().replace(saved)
        await self.reconciler.refresh()
        return saved

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _statuses(self) -> StatusSet:
        if self.statuses is None:
            raise InvariantViolation("Board has not been loaded", code="BOARD_NOT_LOADED")
        return self.statuses

    def _drag(self) -> DragSessionController:
        if self.drag is None:
            raise InvariantViolation("Board has not been loaded", code="BOARD_NOT_LOADED")
        return self.drag
