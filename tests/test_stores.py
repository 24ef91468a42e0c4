"""
SQL store adapter tests against an in-memory SQLite database.
"""

from uuid import uuid4

import pytest

from taskboard.board.presets import DEFAULT_STATUSES, STATUS_TEMPLATES
from taskboard.core.exceptions import NotFoundError, PartialReplaceError
from taskboard.models import Project
from taskboard.models.task import TaskPriority
from taskboard.schemas.status import StatusPayload
from taskboard.stores.status_store import SqlStatusStore
from taskboard.stores.task_store import SqlTaskStore


async def add_project(session_factory, user_id=None, name="Website"):
    async with session_factory() as session:
        project = Project(user_id=user_id or uuid4(), name=name)
        session.add(project)
        await session.commit()
        return project


@pytest.fixture
def task_store(session_factory):
    return SqlTaskStore(session_factory)


@pytest.fixture
def status_store(session_factory):
    return SqlStatusStore(session_factory)


# ---------------------------------------------------------------------------
# 1. Tasks
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_and_list_tasks_by_position(session_factory, task_store):
    project = await add_project(session_factory)
    second = await task_store.create_task(project.id, None, "Second", 1)
    first = await task_store.create_task(
        project.id, None, "First", 0, priority=TaskPriority.high, estimated_hours=2.5
    )

    tasks = await task_store.list_tasks(project.id)

    assert [t.id for t in tasks] == [first.id, second.id]
    assert tasks[0].priority is TaskPriority.high
    assert tasks[0].estimated_hours == 2.5


@pytest.mark.asyncio
async def test_update_task_fields_and_position(session_factory, task_store):
    project = await add_project(session_factory)
    task = await task_store.create_task(project.id, None, "Draft", 0)

    await task_store.update_task(task.id, {"title": "Final", "priority": TaskPriority.urgent})
    await task_store.update_task_position(task.id, 7)

    [stored] = await task_store.list_tasks(project.id)
    assert stored.title == "Final"
    assert stored.priority is TaskPriority.urgent
    assert stored.position == 7


@pytest.mark.asyncio
async def test_update_rejects_unknown_fields(task_store):
    with pytest.raises(ValueError):
        await task_store.update_task(uuid4(), {"position": 3})


@pytest.mark.asyncio
async def test_writes_to_missing_task_raise_not_found(task_store):
    with pytest.raises(NotFoundError):
        await task_store.update_task(uuid4(), {"title": "x"})
    with pytest.raises(NotFoundError):
        await task_store.update_task_position(uuid4(), 1)
    with pytest.raises(NotFoundError):
        await task_store.delete_task(uuid4())


@pytest.mark.asyncio
async def test_delete_task(session_factory, task_store):
    project = await add_project(session_factory)
    task = await task_store.create_task(project.id, None, "Gone", 0)

    await task_store.delete_task(task.id)

    assert await task_store.list_tasks(project.id) == []


# ---------------------------------------------------------------------------
# 2. Statuses
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_defaults(session_factory, status_store):
    project = await add_project(session_factory)

    created = await status_store.create_defaults(project.id, DEFAULT_STATUSES)
    listed = await status_store.list_statuses(project.id)

    assert [s.name for s in listed] == [s.name for s in DEFAULT_STATUSES]
    assert [s.id for s in listed] == [s.id for s in created]
    assert [s.position for s in listed] == [0, 1, 2, 3]


@pytest.mark.asyncio
async def test_list_statuses_scoped_to_owner(session_factory, status_store):
    owner = uuid4()
    project = await add_project(session_factory, owner)
    await status_store.create_defaults(project.id, DEFAULT_STATUSES)

    assert len(await status_store.list_statuses(project.id, user_id=owner)) == 4
    assert await status_store.list_statuses(project.id, user_id=uuid4()) == []


@pytest.mark.asyncio
async def test_replace_all_clears_task_statuses(session_factory, status_store, task_store):
    project = await add_project(session_factory)
    [first, *_] = await status_store.create_defaults(project.id, DEFAULT_STATUSES)
    task = await task_store.create_task(project.id, first.id, "Assigned", 0)

    saved = await status_store.replace_all(project.id, STATUS_TEMPLATES["Kanban"])

    assert [s.name for s in saved] == ["To Do", "Doing", "Done"]
    assert [s.name for s in await status_store.list_statuses(project.id)] == ["To Do", "Doing", "Done"]
    [stored] = await task_store.list_tasks(project.id)
    assert stored.id == task.id
    assert stored.status_id is None


@pytest.mark.asyncio
async def test_failed_insert_leaves_project_without_statuses(session_factory, status_store):
    project = await add_project(session_factory)
    await status_store.create_defaults(project.id, DEFAULT_STATUSES)
    # Bypasses validation so the NOT NULL constraint rejects the insert
    broken = StatusPayload.model_construct(name=None, color="#6B7280", is_done_status=False, position=0)

    with pytest.raises(PartialReplaceError):
        await status_store.replace_all(project.id, [broken])

    assert await status_store.list_statuses(project.id) == []


@pytest.mark.asyncio
async def test_copy_sources_are_other_projects_of_owner(session_factory, status_store):
    owner = uuid4()
    current = await add_project(session_factory, owner, "Current")
    sibling = await add_project(session_factory, owner, "Sibling")
    await add_project(session_factory, uuid4(), "Stranger")

    sources = await status_store.list_copy_sources(current.id, owner)

    assert [(s.id, s.name) for s in sources] == [(sibling.id, "Sibling")]
