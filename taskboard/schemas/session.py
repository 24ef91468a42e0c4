"""
Board websocket message schemas.

Client messages are a tagged union on ``type``; the server answers with
``board`` snapshots, ``notice`` (recoverable) or ``error`` (rejected).
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union
from uuid import UUID

from pydantic import BaseModel, Field, TypeAdapter

from taskboard.schemas.board import TaskFilters, ViewMode
from taskboard.schemas.task import InlineField


class DragStartMessage(BaseModel):
    type: Literal["drag_start"]
    id: UUID


class DragOverMessage(BaseModel):
    type: Literal["drag_over"]
    target_id: UUID | None = None


class DragEndMessage(BaseModel):
    type: Literal["drag_end"]
    target_id: UUID | None = None


class DragCancelMessage(BaseModel):
    type: Literal["drag_cancel"]


class QuickAddMessage(BaseModel):
    type: Literal["quick_add"]
    title: str = Field(min_length=1, max_length=500)
    status_id: UUID | None = None


class FieldChangeMessage(BaseModel):
    type: Literal["field_change"]
    task_id: UUID
    field: InlineField
    value: Any = None


class SetFiltersMessage(BaseModel):
    type: Literal["set_filters"]
    filters: TaskFilters


class SetViewMessage(BaseModel):
    type: Literal["set_view"]
    view: ViewMode


ClientMessage = Annotated[
    Union[
        DragStartMessage,
        DragOverMessage,
        DragEndMessage,
        DragCancelMessage,
        QuickAddMessage,
        FieldChangeMessage,
        SetFiltersMessage,
        SetViewMessage,
    ],
    Field(discriminator="type"),
]

client_message_adapter: TypeAdapter[ClientMessage] = TypeAdapter(ClientMessage)
