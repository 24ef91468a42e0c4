"""
In-memory ordered status set for one project.
"""

from __future__ import annotations

from typing import Iterable, Iterator
from uuid import UUID

from taskboard.core.exceptions import InvariantViolation
from taskboard.schemas.status import StatusRead


class StatusSet:
    """
    The ordered statuses (columns) of one project.

    A project always has at least one status: the set refuses to be built
    from, or replaced with, an empty sequence.
    """

    def __init__(self, project_id: UUID, statuses: Iterable[StatusRead]) -> None:
        self.project_id = project_id
        self._statuses: list[StatusRead] = []
        self._by_id: dict[UUID, StatusRead] = {}
        self.replace(statuses)

    def replace(self, statuses: Iterable[StatusRead]) -> None:
        items = list(statuses)
        if not items:
            raise InvariantViolation(
                "A project must keep at least one status",
                code="EMPTY_STATUS_SET",
            )
        self._statuses = items
        self._by_id = {s.id: s for s in items}

    def __len__(self) -> int:
        return len(self._statuses)

    def __iter__(self) -> Iterator[StatusRead]:
        return iter(self._statuses)

    def __contains__(self, status_id: object) -> bool:
        return status_id in self._by_id

    @property
    def statuses(self) -> list[StatusRead]:
        return list(self._statuses)

    @property
    def first(self) -> StatusRead:
        return self._statuses[0]

    @property
    def done_ids(self) -> frozenset[UUID]:
        return frozenset(s.id for s in self._statuses if s.is_done_status)

    def get(self, status_id: UUID | None) -> StatusRead | None:
        if status_id is None:
            return None
        return self._by_id.get(status_id)

    def is_done(self, status_id: UUID | None) -> bool:
        status = self.get(status_id)
        return status is not None and status.is_done_status
