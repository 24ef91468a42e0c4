"""
Drop target resolution.

A hover or drop target id can name either a status column or another task.
``resolve_drop`` is the single place that decides which, and what the drop
means for the task collection:

1. a status id different from the dragged task's status -> ReassignStatus
2. another task id                                      -> Reorder
3. anything else                                        -> NoOp

On the board a card sits inside its column, so a card in a different
column resolves to that column's status (rule 1 wins over rule 2). The
list view has no columns and a card target is always a reorder.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar, Sequence, Union
from uuid import UUID

from taskboard.board.status_set import StatusSet
from taskboard.board.task_collection import TaskCollection
from taskboard.schemas.task import TaskRead


class DropAction(str, enum.Enum):
    reassign_status = "reassign_status"
    reorder = "reorder"
    noop = "noop"


@dataclass(frozen=True)
class ReassignStatus:
    task_id: UUID
    status_id: UUID
    previous_status_id: UUID | None

    action: ClassVar[DropAction] = DropAction.reassign_status


@dataclass(frozen=True)
class Reorder:
    task_id: UUID
    from_index: int
    to_index: int
    # Full collection after the move, positions renumbered 0..n-1
    tasks: tuple[TaskRead, ...]
    # (task_id, new_position) for every task whose position changed, by index
    changed: tuple[tuple[UUID, int], ...]

    action: ClassVar[DropAction] = DropAction.reorder


@dataclass(frozen=True)
class NoOp:
    reason: str

    action: ClassVar[DropAction] = DropAction.noop


DropResolution = Union[ReassignStatus, Reorder, NoOp]


def _find(tasks: Sequence[TaskRead], task_id: UUID) -> tuple[int, TaskRead] | None:
    for i, task in enumerate(tasks):
        if task.id == task_id:
            return i, task
    return None


def target_status(
    active: TaskRead,
    target_id: UUID,
    tasks: Sequence[TaskRead],
    statuses: StatusSet,
    *,
    board: bool = True,
) -> UUID | None:
    """
    The status a drop on ``target_id`` would move ``active`` into, or None
    when the target does not change the task's status.
    """
    if target_id in statuses:
        return target_id if target_id != active.status_id else None

    if board and target_id != active.id:
        found = _find(tasks, target_id)
        if found is not None:
            card_status = found[1].status_id
            if card_status is not None and card_status != active.status_id:
                return card_status
    return None


def resolve_drop(
    active_id: UUID,
    target_id: UUID | None,
    tasks: Sequence[TaskRead],
    statuses: StatusSet,
    *,
    board: bool = True,
) -> DropResolution:
    """Decide what dropping ``active_id`` on ``target_id`` does. Pure."""
    if target_id is None:
        return NoOp("dropped outside any target")

    found = _find(tasks, active_id)
    if found is None:
        return NoOp("dragged task is not in the collection")
    from_index, active = found

    new_status = target_status(active, target_id, tasks, statuses, board=board)
    if new_status is not None:
        return ReassignStatus(
            task_id=active_id,
            status_id=new_status,
            previous_status_id=active.status_id,
        )

    if target_id == active_id:
        return NoOp("dropped on itself")

    over = _find(tasks, target_id)
    if over is None:
        return NoOp("target is the task's own status" if target_id in statuses else "unknown target")

    to_index = over[0]
    moved = TaskCollection.moved(tasks, from_index, to_index)
    previous = {t.id: t.position for t in tasks}
    changed = tuple((t.id, t.position) for t in moved if previous[t.id] != t.position)
    return Reorder(
        task_id=active_id,
        from_index=from_index,
        to_index=to_index,
        tasks=tuple(moved),
        changed=changed,
    )
