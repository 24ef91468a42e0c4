"""
Board and list projection tests.
"""

import pytest

from taskboard.board.status_set import StatusSet
from taskboard.board.task_collection import TaskCollection
from taskboard.board.views import board_view, list_view
from taskboard.core.exceptions import InvariantViolation
from taskboard.models.task import TaskPriority
from taskboard.schemas.board import TaskFilters
from tests.fakes import make_task


@pytest.fixture
def status_set(project_id, statuses):
    return StatusSet(project_id, statuses)


def test_board_has_one_column_per_status_in_order(project_id, tasks, statuses, status_set):
    view = board_view(TaskCollection(project_id, tasks), status_set)

    assert [c.status.name for c in view.columns] == ["Backlog", "Doing", "Done"]
    assert [c.count for c in view.columns] == [1, 1, 1]
    assert view.unassigned_count == 0


def test_board_column_keeps_collection_order(project_id, statuses, status_set):
    s = statuses[1].id
    a = make_task(project_id, s, 4, "late")
    b = make_task(project_id, s, 1, "early")

    view = board_view(TaskCollection(project_id, [a, b]), status_set)

    assert [t.title for t in view.columns[1].tasks] == ["late", "early"]


def test_unassigned_tasks_are_counted_not_placed(project_id, tasks, status_set):
    orphan = make_task(project_id, None, 3)

    view = board_view(TaskCollection(project_id, [*tasks, orphan]), status_set)

    assert view.unassigned_count == 1
    assert sum(c.count for c in view.columns) == 3


def test_list_is_sorted_by_position_and_flags_done(project_id, statuses, status_set):
    a = make_task(project_id, statuses[2].id, 2, "a")
    b = make_task(project_id, statuses[0].id, 0, "b")
    c = make_task(project_id, None, 1, "c")

    view = list_view(TaskCollection(project_id, [a, b, c]), status_set)

    assert [r.task.title for r in view.rows] == ["b", "c", "a"]
    assert [r.is_done for r in view.rows] == [False, False, True]
    assert view.rows[1].status is None
    assert view.default_status_id == statuses[0].id


def test_filters_by_status_and_priority(project_id, statuses, status_set):
    s = statuses[0].id
    urgent = make_task(project_id, s, 0, "urgent", priority=TaskPriority.urgent)
    low = make_task(project_id, s, 1, "low", priority=TaskPriority.low)
    other = make_task(project_id, statuses[1].id, 2, "other", priority=TaskPriority.urgent)
    collection = TaskCollection(project_id, [urgent, low, other])

    by_priority = list_view(collection, status_set, TaskFilters(priority=TaskPriority.urgent))
    both = list_view(collection, status_set, TaskFilters(status_id=s, priority=TaskPriority.urgent))

    assert [r.task.title for r in by_priority.rows] == ["urgent", "other"]
    assert [r.task.title for r in both.rows] == ["urgent"]


def test_status_set_cannot_become_empty(project_id, statuses, status_set):
    with pytest.raises(InvariantViolation):
        status_set.replace([])

    assert len(status_set) == 3
