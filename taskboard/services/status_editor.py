"""
Status editor: seeding, the editable draft, copy-from-project and save.
"""

from __future__ import annotations

import logging
from typing import Sequence
from uuid import UUID

from taskboard.board.presets import DEFAULT_STATUSES
from taskboard.board.status_draft import StatusDraft
from taskboard.core.exceptions import (
    InvariantViolation,
    PartialReplaceError,
    StatusSaveError,
    StoreError,
)
from taskboard.schemas.status import StatusDraftItem, StatusRead
from taskboard.stores.base import StatusStore

logger = logging.getLogger(__name__)


class StatusEditor:
    """
    Edits one project's statuses through a draft.

    Every edit happens on ``draft``; ``save`` is the only call that writes.
    A failed save keeps the draft so the same ``save`` can be retried.
    """

    def __init__(self, store: StatusStore, user_id: UUID | None = None) -> None:
        self.store = store
        self.user_id = user_id
        self.draft: StatusDraft | None = None

    async def list_or_seed_defaults(self, project_id: UUID) -> list[StatusRead]:
        statuses = await self.store.list_statuses(project_id)
        if statuses:
            return statuses
        logger.info("Seeding default statuses for project %s", project_id)
        return await self.store.create_defaults(project_id, DEFAULT_STATUSES)

    # -----------------------------------------------------------------------
    # Draft lifecycle
    # -----------------------------------------------------------------------

    def open(self, statuses: list[StatusRead]) -> StatusDraft:
        self.draft = StatusDraft.from_statuses(statuses)
        return self.draft

    def open_items(self, items: Sequence[StatusDraftItem]) -> StatusDraft:
        """Open a draft submitted whole by a client."""
        self.draft = StatusDraft.from_items(items)
        return self.draft

    def discard(self) -> None:
        self.draft = None

    def require_draft(self) -> StatusDraft:
        if self.draft is None:
            raise InvariantViolation("The status editor is not open", code="EDITOR_NOT_OPEN")
        return self.draft

    async def copy_from(self, source_project_id: UUID) -> StatusDraft:
        """
        Replace the draft with the statuses of another project of the same
        owner. A source without statuses leaves the draft unchanged.
        """
        draft = self.require_draft()
        statuses = await self.store.list_statuses(source_project_id, user_id=self.user_id)
        if not statuses:
            logger.info("Project %s has no statuses to copy", source_project_id)
            return draft
        draft.replace_with(statuses)
        return draft

    async def save(self, project_id: UUID) -> list[StatusRead]:
        draft = self.require_draft()
        try:
            saved = await self.store.replace_all(project_id, draft.payload())
        except PartialReplaceError as exc:
            logger.error("Status save for project %s left it without statuses", project_id)
            raise StatusSaveError(
                "Statuses could not be saved and the project currently has none. Retry the save.",
                statuses_lost=True,
            ) from exc
        except StoreError as exc:
            raise StatusSaveError(
                "Statuses could not be saved. Retry the save.",
                statuses_lost=False,
            ) from exc
        self.draft = None
        return saved

