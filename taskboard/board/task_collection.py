"""
In-memory ordered task list for one project.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Sequence
from uuid import UUID

from taskboard.board.ordering import array_move
from taskboard.core.exceptions import NotFoundError
from taskboard.schemas.task import TaskRead

Snapshot = tuple[TaskRead, ...]


class TaskCollection:
    """
    A project's tasks in display order.

    List order is the single global order: the board derives its columns
    from it and the list view renders it directly. Records are immutable;
    every change goes through a method here and swaps in a new record.
    """

    def __init__(self, project_id: UUID, tasks: Iterable[TaskRead] = ()) -> None:
        self.project_id = project_id
        self._tasks: list[TaskRead] = list(tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[TaskRead]:
        return iter(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return any(t.id == task_id for t in self._tasks)

    @property
    def tasks(self) -> list[TaskRead]:
        return list(self._tasks)

    def get(self, task_id: UUID) -> TaskRead | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def index_of(self, task_id: UUID) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        raise NotFoundError("Task not found", code="TASK_NOT_FOUND")

    # -----------------------------------------------------------------------
    # Snapshots
    # -----------------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        return tuple(self._tasks)

    def replace_all(self, tasks: Iterable[TaskRead]) -> None:
        """Swap in the authoritative list read back from the store."""
        self._tasks = list(tasks)

    # -----------------------------------------------------------------------
    # Mutations
    # -----------------------------------------------------------------------

    def set_status(self, task_id: UUID, status_id: UUID | None) -> None:
        self.update_fields(task_id, status_id=status_id)

    def update_fields(self, task_id: UUID, **fields: Any) -> TaskRead:
        index = self.index_of(task_id)
        updated = self._tasks[index].model_copy(update=fields)
        self._tasks[index] = updated
        return updated

    def append(self, task: TaskRead) -> None:
        self._tasks.append(task)

    def remove(self, task_id: UUID) -> TaskRead:
        # Positions of the remaining tasks are left as they are
        return self._tasks.pop(self.index_of(task_id))

    # -----------------------------------------------------------------------
    # Ordering
    # -----------------------------------------------------------------------

    @staticmethod
    def moved(tasks: Sequence[TaskRead], from_index: int, to_index: int) -> list[TaskRead]:
        """Array-move ``tasks`` and renumber every position to its new index."""
        return [
            task if task.position == i else task.model_copy(update={"position": i})
            for i, task in enumerate(array_move(tasks, from_index, to_index))
        ]

    @property
    def next_position(self) -> int:
        """Position for an appended task: the current task count."""
        return len(self._tasks)
