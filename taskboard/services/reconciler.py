"""
Optimistic apply + persist for drop resolutions.

Each resolution is handled as a small command: apply it to the in-memory
collection, attempt the writes, and on any failure replace the collection
with a fresh read from the store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from uuid import UUID

from taskboard.board.drop_resolver import DropAction, DropResolution, ReassignStatus, Reorder
from taskboard.board.ordering import is_dense
from taskboard.board.task_collection import TaskCollection
from taskboard.core.exceptions import StoreError, TaskboardError
from taskboard.schemas.board import DropOutcomeResponse
from taskboard.stores.base import TaskStore

logger = logging.getLogger(__name__)


@dataclass
class ReconcileOutcome:
    action: DropAction
    persisted: bool = False
    writes_attempted: int = 0
    failed_task_ids: list[UUID] = field(default_factory=list)
    reverted: bool = False
    # Recoverable error for the user (toast)
    notice: str | None = None

    def to_response(self) -> DropOutcomeResponse:
        return DropOutcomeResponse(
            action=self.action.value,
            persisted=self.persisted,
            writes_attempted=self.writes_attempted,
            failed_task_ids=list(self.failed_task_ids),
            reverted=self.reverted,
            notice=self.notice,
        )


class Reconciler:
    """Applies resolutions to ``tasks`` and makes them durable through ``store``."""

    def __init__(self, tasks: TaskCollection, store: TaskStore) -> None:
        self.tasks = tasks
        self.store = store

    async def apply_and_persist(self, resolution: DropResolution) -> ReconcileOutcome:
        if isinstance(resolution, ReassignStatus):
            return await self._reassign(resolution)
        if isinstance(resolution, Reorder):
            return await self._reorder(resolution)
        return ReconcileOutcome(action=DropAction.noop)

    async def _reassign(self, resolution: ReassignStatus) -> ReconcileOutcome:
        outcome = ReconcileOutcome(action=resolution.action, writes_attempted=1)
        self.tasks.set_status(resolution.task_id, resolution.status_id)
        try:
            await self.store.update_task(
                resolution.task_id, {"status_id": resolution.status_id}
            )
        except TaskboardError as exc:
            logger.warning(
                "Status change of task %s failed, reloading: %s", resolution.task_id, exc
            )
            outcome.failed_task_ids.append(resolution.task_id)
            outcome.notice = "Could not move the task. The board has been reloaded."
            await self.refresh(outcome)
            return outcome

        outcome.persisted = True
        logger.info(
            "Task %s moved from status %s to %s",
            resolution.task_id,
            resolution.previous_status_id,
            resolution.status_id,
        )
        return outcome

    async def _reorder(self, resolution: Reorder) -> ReconcileOutcome:
        outcome = ReconcileOutcome(action=resolution.action)
        self.tasks.replace_all(resolution.tasks)

        # Best effort, not transactional: keep going after a failed write
        for task_id, position in resolution.changed:
            outcome.writes_attempted += 1
            try:
                await self.store.update_task_position(task_id, position)
            except TaskboardError as exc:
                logger.warning("Position write for task %s failed: %s", task_id, exc)
                outcome.failed_task_ids.append(task_id)

        if outcome.failed_task_ids:
            outcome.notice = "Some tasks could not be reordered. The board has been reloaded."
            await self.refresh(outcome)
            return outcome

        if not is_dense([t.position for t in self.tasks]):
            logger.warning("Positions of project %s are not dense after reorder", self.tasks.project_id)
        outcome.persisted = True
        logger.info(
            "Task %s moved from index %s to %s (%s position writes)",
            resolution.task_id,
            resolution.from_index,
            resolution.to_index,
            outcome.writes_attempted,
        )
        return outcome

    async def refresh(self, outcome: ReconcileOutcome | None = None) -> None:
        """Replace the collection with what the store actually holds."""
        try:
            fresh = await self.store.list_tasks(self.tasks.project_id)
        except StoreError as exc:
            # Keep the optimistic state; the next successful read resolves it
            logger.error("Reload of project %s failed: %s", self.tasks.project_id, exc)
            if outcome is not None:
                outcome.notice = "Changes could not be saved and the board could not be reloaded."
            return
        self.tasks.replace_all(fresh)
        if outcome is not None:
            outcome.reverted = True
