"""
Drag session lifecycle tests.

Verifies that:
- Only one drag runs at a time and unknown tasks cannot be dragged
- Hovering previews a status change and the preview follows the pointer
- Ending or cancelling undoes only the hover preview before resolving
"""

from uuid import uuid4

import pytest

from taskboard.board.drag_session import DragSessionController
from taskboard.board.drop_resolver import NoOp, ReassignStatus, Reorder
from taskboard.board.status_set import StatusSet
from taskboard.board.task_collection import TaskCollection
from tests.fakes import make_task


@pytest.fixture
def collection(project_id, tasks):
    return TaskCollection(project_id, tasks)


@pytest.fixture
def controller(collection, project_id, statuses):
    return DragSessionController(collection, StatusSet(project_id, statuses))


# ---------------------------------------------------------------------------
# 1. Begin
# ---------------------------------------------------------------------------

def test_begin_starts_a_session(controller, tasks):
    assert controller.begin(tasks[0].id) is True
    assert controller.is_dragging
    assert controller.session.active_item_id == tasks[0].id


def test_second_begin_is_ignored(controller, tasks):
    controller.begin(tasks[0].id)

    assert controller.begin(tasks[1].id) is False
    assert controller.session.active_item_id == tasks[0].id


def test_begin_unknown_task_is_ignored(controller):
    assert controller.begin(uuid4()) is False
    assert not controller.is_dragging


# ---------------------------------------------------------------------------
# 2. Hover preview
# ---------------------------------------------------------------------------

def test_hover_previews_status_change(controller, collection, tasks, statuses):
    t1 = tasks[0]
    controller.begin(t1.id)

    controller.update_hover(statuses[1].id)

    assert collection.get(t1.id).status_id == statuses[1].id


def test_preview_follows_latest_hover_target(controller, collection, tasks, statuses):
    t1 = tasks[0]
    controller.begin(t1.id)

    controller.update_hover(statuses[1].id)
    controller.update_hover(statuses[2].id)
    assert collection.get(t1.id).status_id == statuses[2].id

    controller.update_hover(None)
    assert collection.get(t1.id).status_id == statuses[0].id


def test_hover_without_session_does_nothing(controller, collection, tasks):
    before = collection.snapshot()

    controller.update_hover(tasks[1].id)

    assert collection.snapshot() == before


# ---------------------------------------------------------------------------
# 3. End and cancel
# ---------------------------------------------------------------------------

def test_end_after_preview_still_reassigns(controller, collection, tasks, statuses):
    t1 = tasks[0]
    controller.begin(t1.id)
    controller.update_hover(statuses[2].id)

    resolution = controller.end(statuses[2].id)

    assert isinstance(resolution, ReassignStatus)
    assert resolution.previous_status_id == statuses[0].id
    # The collection is back to the pre-drag state until the reconciler applies it
    assert collection.get(t1.id).status_id == statuses[0].id
    assert not controller.is_dragging


def test_drop_on_itself_leaves_collection_unchanged(controller, collection, tasks, statuses):
    before = collection.snapshot()
    controller.begin(tasks[0].id)
    controller.update_hover(statuses[1].id)

    resolution = controller.end(tasks[0].id)

    assert isinstance(resolution, NoOp)
    assert collection.snapshot() == before


def test_drop_outside_restores_preview(controller, collection, tasks, statuses):
    before = collection.snapshot()
    controller.begin(tasks[0].id)
    controller.update_hover(statuses[1].id)

    resolution = controller.end(None)

    assert isinstance(resolution, NoOp)
    assert collection.snapshot() == before


def test_cancel_restores_and_ends_session(controller, collection, tasks, statuses):
    before = collection.snapshot()
    controller.begin(tasks[0].id)
    controller.update_hover(statuses[2].id)

    controller.cancel()

    assert collection.snapshot() == before
    assert not controller.is_dragging


def test_end_without_session_is_noop(controller, tasks):
    assert isinstance(controller.end(tasks[1].id), NoOp)


def test_list_mode_card_drop_is_reorder(controller, tasks):
    controller.board = False
    controller.begin(tasks[2].id)

    resolution = controller.end(tasks[0].id)

    assert isinstance(resolution, Reorder)


def test_edits_made_during_drag_are_kept(controller, collection, tasks, statuses, project_id):
    t1, t2, _ = tasks
    controller.begin(t1.id)
    controller.update_hover(statuses[1].id)

    collection.update_fields(t2.id, title="renamed")
    added = make_task(project_id, statuses[0].id, 3, "added")
    collection.append(added)
    controller.update_hover(statuses[2].id)
    controller.cancel()

    assert collection.get(t2.id).title == "renamed"
    assert added.id in collection
    assert collection.get(t1.id).status_id == statuses[0].id


def test_status_set_on_dragged_task_mid_drag_is_not_undone(controller, collection, tasks, statuses):
    t1 = tasks[0]
    controller.begin(t1.id)
    controller.update_hover(statuses[1].id)

    collection.set_status(t1.id, statuses[2].id)
    controller.end(None)

    assert collection.get(t1.id).status_id == statuses[2].id
