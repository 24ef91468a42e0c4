"""
WebSocket connection manager.
In-memory registry of open board views, single server only.
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import WebSocket
from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)

# Close code sent to a board view replaced by a newer connection
REPLACED_CLOSE_CODE = 4000


class ConnectionManager:
    """
    Maps project_id → active WebSocket.
    One board view per project. New connection replaces old.
    """

    def __init__(self) -> None:
        self._active: dict[UUID, WebSocket] = {}

    async def connect(self, project_id: UUID, websocket: WebSocket) -> None:
        await websocket.accept()
        previous = self._active.get(project_id)
        self._active[project_id] = websocket
        if previous is not None and previous is not websocket:
            logger.info("Replacing board view for project_id=%s", project_id)
            await self._close(previous)
        logger.info("WebSocket connected: project_id=%s", project_id)

    def disconnect(self, project_id: UUID, websocket: WebSocket) -> None:
        # A replaced connection must not unregister its successor
        if self._active.get(project_id) is websocket:
            del self._active[project_id]
            logger.info("WebSocket disconnected: project_id=%s", project_id)

    def is_active(self, project_id: UUID, websocket: WebSocket) -> bool:
        return self._active.get(project_id) is websocket

    async def send(self, project_id: UUID, websocket: WebSocket, data: dict) -> bool:
        """
        Send JSON payload to a board view.
        Removes the connection and returns False if sending fails.
        """
        try:
            await websocket.send_json(data)
        except (RuntimeError, OSError) as exc:
            logger.warning(
                "Failed to send to project_id=%s, removing connection: %s",
                project_id,
                exc,
            )
            self.disconnect(project_id, websocket)
            return False
        return True

    @property
    def connected_project_ids(self) -> list[UUID]:
        return list(self._active.keys())

    async def _close(self, websocket: WebSocket) -> None:
        if websocket.client_state is WebSocketState.CONNECTED:
            try:
                await websocket.close(code=REPLACED_CLOSE_CODE)
            except RuntimeError as exc:
                logger.debug("Closing replaced connection failed: %s", exc)


# Module-level singleton, imported by the board websocket router
manager = ConnectionManager()
