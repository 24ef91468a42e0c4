"""
Board websocket tests.

Verifies that:
- Connecting sends a board snapshot, unknown projects are refused
- Drag messages move tasks and every message is answered with a snapshot
- Invalid messages and rejected actions produce ``error`` messages
- Recovered persistence failures produce ``notice`` messages
- A new connection for a project replaces the previous one
"""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect, WebSocketState

from taskboard.core.dependencies import get_project_finder, get_status_store, get_task_store
from taskboard.core.exceptions import NotFoundError
from taskboard.core.websocket import REPLACED_CLOSE_CODE, ConnectionManager
from taskboard.main import app
from taskboard.schemas.project import ProjectResponse


@pytest.fixture
def ws_client(project_id, owner_id, task_store, status_store):
    async def find(pid):
        if pid != project_id:
            raise NotFoundError("Project not found", code="PROJECT_NOT_FOUND")
        return ProjectResponse(id=project_id, user_id=owner_id, name="Website", created_at="2026-10-19T09:00:00Z")

    app.dependency_overrides[get_project_finder] = lambda: find
    app.dependency_overrides[get_task_store] = lambda: task_store
    app.dependency_overrides[get_status_store] = lambda: status_store
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def board_url(project_id) -> str:
    return f"/api/v1/ws/projects/{project_id}/board"


def column_titles(message: dict) -> list[list[str]]:
    return [[t["title"] for t in c["tasks"]] for c in message["data"]["columns"]]


# ---------------------------------------------------------------------------
# 1. Connect
# ---------------------------------------------------------------------------

def test_connect_sends_board_snapshot(ws_client, project_id):
    with ws_client.websocket_connect(board_url(project_id)) as ws:
        message = ws.receive_json()

    assert message["type"] == "board"
    assert message["view"] == "board"
    assert column_titles(message) == [["T1"], ["T2"], ["T3"]]


def test_unknown_project_is_refused(ws_client):
    with pytest.raises(WebSocketDisconnect) as exc_info:
        with ws_client.websocket_connect(board_url(uuid4())) as ws:
            ws.receive_json()

    assert exc_info.value.code == 4404


# ---------------------------------------------------------------------------
# 2. Messages
# ---------------------------------------------------------------------------

def test_drag_to_column_moves_task(ws_client, project_id, tasks, statuses, task_store):
    t1 = tasks[0]
    done = statuses[2]

    with ws_client.websocket_connect(board_url(project_id)) as ws:
        ws.receive_json()
        ws.send_json({"type": "drag_start", "id": str(t1.id)})
        ws.receive_json()
        ws.send_json({"type": "drag_over", "target_id": str(done.id)})
        preview = ws.receive_json()
        ws.send_json({"type": "drag_end", "target_id": str(done.id)})
        final = ws.receive_json()

    assert column_titles(preview) == [[], ["T2"], ["T1", "T3"]]
    assert column_titles(final) == [[], ["T2"], ["T1", "T3"]]
    assert task_store.rows[t1.id].status_id == done.id


def test_quick_add_and_set_view(ws_client, project_id):
    with ws_client.websocket_connect(board_url(project_id)) as ws:
        ws.receive_json()
        ws.send_json({"type": "quick_add", "title": "T4"})
        ws.receive_json()
        ws.send_json({"type": "set_view", "view": "list"})
        listed = ws.receive_json()

    assert listed["view"] == "list"
    assert [r["task"]["title"] for r in listed["data"]["rows"]] == ["T1", "T2", "T3", "T4"]


def test_set_filters_hides_done(ws_client, project_id):
    with ws_client.websocket_connect(board_url(project_id)) as ws:
        ws.receive_json()
        ws.send_json({"type": "set_filters", "filters": {"hide_done": True}})
        message = ws.receive_json()

    assert column_titles(message) == [["T1"], ["T2"], []]


def test_invalid_message_returns_error(ws_client, project_id):
    with ws_client.websocket_connect(board_url(project_id)) as ws:
        ws.receive_json()
        ws.send_json({"type": "teleport"})
        message = ws.receive_json()

    assert message["type"] == "error"
    assert message["detail"]["code"] == "INVALID_MESSAGE"


def test_rejected_edit_returns_error_then_snapshot(ws_client, project_id, tasks):
    with ws_client.websocket_connect(board_url(project_id)) as ws:
        ws.receive_json()
        ws.send_json({
            "type": "field_change",
            "task_id": str(tasks[0].id),
            "field": "estimated_hours",
            "value": -1,
        })
        error = ws.receive_json()
        snapshot = ws.receive_json()

    assert error["type"] == "error"
    assert error["detail"]["code"] == "INVALID_FIELD"
    assert snapshot["type"] == "board"


def test_failed_write_returns_notice(ws_client, project_id, tasks, task_store):
    task_store.fail_on.add("update_task")

    with ws_client.websocket_connect(board_url(project_id)) as ws:
        ws.receive_json()
        ws.send_json({
            "type": "field_change",
            "task_id": str(tasks[0].id),
            "field": "title",
            "value": "Renamed",
        })
        notice = ws.receive_json()
        snapshot = ws.receive_json()

    assert notice["type"] == "notice"
    assert column_titles(snapshot)[0] == ["T1"]


# ---------------------------------------------------------------------------
# 3. Connection manager
# ---------------------------------------------------------------------------

class FakeWebSocket:
    def __init__(self):
        self.client_state = WebSocketState.CONNECTED
        self.sent: list[dict] = []
        self.close_code: int | None = None

    async def accept(self):
        pass

    async def send_json(self, data):
        if self.client_state is not WebSocketState.CONNECTED:
            raise RuntimeError("WebSocket is not connected")
        self.sent.append(data)

    async def close(self, code=1000):
        self.close_code = code
        self.client_state = WebSocketState.DISCONNECTED


@pytest.mark.asyncio
async def test_new_connection_replaces_previous():
    manager = ConnectionManager()
    project_id = uuid4()
    old, new = FakeWebSocket(), FakeWebSocket()

    await manager.connect(project_id, old)
    await manager.connect(project_id, new)

    assert old.close_code == REPLACED_CLOSE_CODE
    assert manager.is_active(project_id, new)

    # The replaced handler's cleanup must not unregister its successor
    manager.disconnect(project_id, old)
    assert manager.connected_project_ids == [project_id]


@pytest.mark.asyncio
async def test_failed_send_drops_connection():
    manager = ConnectionManager()
    project_id = uuid4()
    ws = FakeWebSocket()
    await manager.connect(project_id, ws)
    ws.client_state = WebSocketState.DISCONNECTED

    assert await manager.send(project_id, ws, {"type": "board"}) is False
    assert manager.connected_project_ids == []
