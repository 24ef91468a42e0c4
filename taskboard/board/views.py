"""
Board and list projections.

Pure functions of the task collection, the status set and the active
filters. They never mutate either model.
"""

from __future__ import annotations

from typing import Iterable

from taskboard.board.status_set import StatusSet
from taskboard.board.task_collection import TaskCollection
from taskboard.schemas.board import (
    BoardColumn,
    BoardResponse,
    ListRow,
    TaskFilters,
    TaskListResponse,
)
from taskboard.schemas.task import TaskRead


def apply_filters(
    tasks: Iterable[TaskRead], statuses: StatusSet, filters: TaskFilters
) -> list[TaskRead]:
    """Status, priority and hide-done filters, keeping input order."""
    done_ids = statuses.done_ids if filters.hide_done else frozenset()
    result = []
    for task in tasks:
        if filters.status_id is not None and task.status_id != filters.status_id:
            continue
        if filters.priority is not None and task.priority != filters.priority:
            continue
        if task.status_id is not None and task.status_id in done_ids:
            continue
        result.append(task)
    return result


def board_view(
    tasks: TaskCollection, statuses: StatusSet, filters: TaskFilters | None = None
) -> BoardResponse:
    """
    One column per status, in status order.

    Tasks keep collection order inside a column: there is no per-column
    index, the global position decides both. Unassigned tasks have no
    column and are only counted.
    """
    visible = apply_filters(tasks, statuses, filters or TaskFilters())
    by_status: dict[object, list[TaskRead]] = {}
    for task in visible:
        by_status.setdefault(task.status_id, []).append(task)

    columns = [
        BoardColumn(
            status=status,
            tasks=by_status.get(status.id, []),
            count=len(by_status.get(status.id, [])),
        )
        for status in statuses
    ]
    placed = sum(column.count for column in columns)
    return BoardResponse(
        project_id=tasks.project_id,
        columns=columns,
        unassigned_count=len(visible) - placed,
    )


def list_view(
    tasks: TaskCollection, statuses: StatusSet, filters: TaskFilters | None = None
) -> TaskListResponse:
    """Every visible task in position order (stable for equal positions)."""
    visible = apply_filters(tasks, statuses, filters or TaskFilters())
    rows = [
        ListRow(
            task=task,
            status=statuses.get(task.status_id),
            is_done=statuses.is_done(task.status_id),
        )
        for task in sorted(visible, key=lambda t: t.position)
    ]
    return TaskListResponse(
        project_id=tasks.project_id,
        rows=rows,
        total=len(rows),
        default_status_id=statuses.first.id,
    )
