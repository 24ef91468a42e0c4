"""
Drag session lifecycle: idle -> dragging -> idle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from taskboard.board.drop_resolver import DropResolution, NoOp, resolve_drop, target_status
from taskboard.board.status_set import StatusSet
from taskboard.board.task_collection import TaskCollection

logger = logging.getLogger(__name__)


@dataclass
class DragSession:
    active_item_id: UUID
    original_status_id: UUID | None
    hover_target_id: UUID | None = None
    # Status currently shown by the hover preview, if any
    preview_status_id: UUID | None = None


class DragSessionController:
    """
    Owns one pointer drag at a time.

    Hovering may preview a status change on the dragged card so it
    visually relocates; nothing is persisted until the caller hands the
    resolution returned by ``end`` to the reconciler. Only the preview is
    undone when the session ends: other edits made to the collection while
    the drag is open are kept.
    """

    def __init__(self, tasks: TaskCollection, statuses: StatusSet, *, board: bool = True) -> None:
        self.tasks = tasks
        self.statuses = statuses
        self.board = board
        self.session: DragSession | None = None

    @property
    def is_dragging(self) -> bool:
        return self.session is not None

    def begin(self, item_id: UUID) -> bool:
        """Start a session. Returns False (no-op) if one is already active."""
        if self.session is not None:
            logger.debug("Drag begin ignored, session already active for %s", self.session.active_item_id)
            return False
        active = self.tasks.get(item_id)
        if active is None:
            logger.debug("Drag begin ignored, unknown task %s", item_id)
            return False
        self.session = DragSession(active_item_id=item_id, original_status_id=active.status_id)
        return True

    def update_hover(self, target_id: UUID | None) -> None:
        session = self.session
        if session is None:
            return
        session.hover_target_id = target_id

        # The preview always reflects only the current hover target
        self._undo_preview(session)
        if target_id is None:
            return
        active = self.tasks.get(session.active_item_id)
        if active is None:
            return
        preview = target_status(
            active, target_id, self.tasks.tasks, self.statuses, board=self.board
        )
        if preview is not None:
            self.tasks.set_status(active.id, preview)
            session.preview_status_id = preview

    def end(self, target_id: UUID | None) -> DropResolution:
        """Finish the session and return what the drop means. Never persists."""
        session = self.session
        if session is None:
            return NoOp("no active drag session")
        try:
            self._undo_preview(session)
            if target_id is None:
                return NoOp("dropped outside any target")
            return resolve_drop(
                session.active_item_id,
                target_id,
                self.tasks.tasks,
                self.statuses,
                board=self.board,
            )
        finally:
            self.session = None

    def cancel(self) -> None:
        self.end(None)

    def _undo_preview(self, session: DragSession) -> None:
        preview = session.preview_status_id
        if preview is None:
            return
        session.preview_status_id = None
        active = self.tasks.get(session.active_item_id)
        # Deleted or re-statused by another edit mid-drag: nothing of ours to undo
        if active is None or active.status_id != preview:
            return
        self.tasks.set_status(active.id, session.original_status_id)
