"""
Editable, unsaved copy of a project's status set.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Sequence
from uuid import UUID, uuid4

from taskboard.board.ordering import array_move
from taskboard.board.presets import (
    DEFAULT_STATUSES,
    NEW_STATUS_NAME,
    STATUS_COLORS,
    STATUS_TEMPLATES,
    is_palette_color,
)
from taskboard.core.exceptions import InvalidEditError, InvariantViolation, NotFoundError
from taskboard.schemas.status import StatusDraftItem, StatusPayload, StatusRead


@dataclass(frozen=True)
class DraftStatus:
    """One row of the draft. ``key`` identifies it while editing."""

    key: str
    name: str
    color: str
    is_done_status: bool
    position: int
    id: UUID | None = None


def _new_key() -> str:
    return uuid4().hex


def _clean_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise InvalidEditError("Status name must not be blank", code="BLANK_STATUS_NAME")
    if len(name) > 100:
        raise InvalidEditError("Status name is too long", code="STATUS_NAME_TOO_LONG")
    return name


def _clean_color(color: str) -> str:
    if not is_palette_color(color):
        raise InvalidEditError(
            f"Color {color!r} is not in the status palette",
            code="INVALID_COLOR",
        )
    return color.upper()


class StatusDraft:
    """
    Ordered draft rows with the same "at least one status" rule as the
    persisted set. Nothing here touches the store; ``StatusEditor.save``
    persists ``payload()``.
    """

    def __init__(self, rows: Iterable[DraftStatus]) -> None:
        self._rows = self._renumber(list(rows))
        if not self._rows:
            raise InvariantViolation(
                "A project must keep at least one status",
                code="EMPTY_STATUS_SET",
            )

    # -----------------------------------------------------------------------
    # Constructors
    # -----------------------------------------------------------------------

    @classmethod
    def from_statuses(cls, statuses: Sequence[StatusRead]) -> StatusDraft:
        if not statuses:
            return cls.from_payloads(DEFAULT_STATUSES)
        return cls(
            DraftStatus(
                key=str(s.id),
                id=s.id,
                name=s.name,
                color=s.color,
                is_done_status=s.is_done_status,
                position=s.position,
            )
            for s in statuses
        )

    @classmethod
    def from_payloads(cls, payloads: Iterable[StatusPayload | StatusRead]) -> StatusDraft:
        """Fresh rows without ids (templates, copies from another project)."""
        return cls(
            DraftStatus(
                key=_new_key(),
                name=p.name,
                color=p.color,
                is_done_status=p.is_done_status,
                position=p.position,
            )
            for p in payloads
        )

    @classmethod
    def from_items(cls, items: Sequence[StatusDraftItem]) -> StatusDraft:
        """Rebuild a draft submitted by a client, validating every row."""
        return cls(
            DraftStatus(
                key=item.key or (str(item.id) if item.id else _new_key()),
                id=item.id,
                name=_clean_name(item.name),
                color=_clean_color(item.color),
                is_done_status=item.is_done_status,
                position=i,
            )
            for i, item in enumerate(items)
        )

    # -----------------------------------------------------------------------
    # Accessors
    # -----------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._rows)

    @property
    def rows(self) -> list[DraftStatus]:
        return list(self._rows)

    def to_items(self) -> list[StatusDraftItem]:
        return [
            StatusDraftItem(
                key=r.key,
                id=r.id,
                name=r.name,
                color=r.color,
                is_done_status=r.is_done_status,
                position=r.position,
            )
            for r in self._rows
        ]

    def payload(self) -> list[StatusPayload]:
        """Rows as they will be inserted: ids stripped, positions 0..n-1."""
        return [
            StatusPayload(
                name=r.name,
                color=r.color,
                is_done_status=r.is_done_status,
                position=i,
            )
            for i, r in enumerate(self._rows)
        ]

    # -----------------------------------------------------------------------
    # Edits
    # -----------------------------------------------------------------------

    def reorder(self, from_index: int, to_index: int) -> None:
        try:
            moved = array_move(self._rows, from_index, to_index)
        except IndexError as exc:
            raise InvalidEditError(str(exc), code="INVALID_INDEX") from exc
        self._rows = self._renumber(moved)

    def add(self) -> DraftStatus:
        row = DraftStatus(
            key=_new_key(),
            name=NEW_STATUS_NAME,
            color=STATUS_COLORS[len(self._rows) % len(STATUS_COLORS)],
            is_done_status=False,
            position=len(self._rows),
        )
        self._rows.append(row)
        return row

    def remove(self, key: str) -> None:
        index = self._index(key)
        if len(self._rows) == 1:
            raise InvariantViolation(
                "Cannot remove the last remaining status",
                code="LAST_STATUS",
            )
        del self._rows[index]
        self._rows = self._renumber(self._rows)

    def rename(self, key: str, name: str) -> None:
        self._update(key, name=_clean_name(name))

    def recolor(self, key: str, color: str) -> None:
        self._update(key, color=_clean_color(color))

    def set_done(self, key: str, is_done: bool) -> None:
        self._update(key, is_done_status=is_done)

    def apply_template(self, template_name: str) -> None:
        template = STATUS_TEMPLATES.get(template_name)
        if template is None:
            raise NotFoundError(
                f"Unknown status template {template_name!r}",
                code="TEMPLATE_NOT_FOUND",
            )
        self._rows = StatusDraft.from_payloads(template).rows

    def replace_with(self, statuses: Sequence[StatusRead | StatusPayload]) -> None:
        """Replace every row with id-less copies of ``statuses``."""
        if not statuses:
            raise InvariantViolation(
                "A project must keep at least one status",
                code="EMPTY_STATUS_SET",
            )
        self._rows = StatusDraft.from_payloads(statuses).rows

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _index(self, key: str) -> int:
        for i, row in enumerate(self._rows):
            if row.key == key:
                return i
        raise NotFoundError("Status not found in draft", code="STATUS_NOT_FOUND")

    def _update(self, key: str, **changes: object) -> None:
        index = self._index(key)
        self._rows[index] = replace(self._rows[index], **changes)

    @staticmethod
    def _renumber(rows: list[DraftStatus]) -> list[DraftStatus]:
        return [r if r.position == i else replace(r, position=i) for i, r in enumerate(rows)]
