"""
Domain errors raised by the board engine and store adapters.

Each error carries the same ``code`` / ``message`` pair the API returns
under ``detail``, so routers can let them propagate to the exception
handler registered in ``taskboard.main``.
"""

from __future__ import annotations

from fastapi import status


class TaskboardError(Exception):
    """Base class for all board errors."""

    code = "TASKBOARD_ERROR"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_detail(self) -> dict[str, object]:
        return {"code": self.code, "message": self.message}


class NotFoundError(TaskboardError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND


class InvariantViolation(TaskboardError):
    """A mutation was rejected before any write because it would break a model rule."""

    code = "INVARIANT_VIOLATION"
    status_code = status.HTTP_409_CONFLICT


class InvalidEditError(TaskboardError):
    code = "INVALID_EDIT"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class StoreError(TaskboardError):
    """A persistence call was rejected by the store."""

    code = "PERSISTENCE_FAILED"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class PartialReplaceError(StoreError):
    """Statuses were deleted but the replacement insert failed."""

    code = "PARTIAL_REPLACE"


class StatusSaveError(TaskboardError):
    """
    Saving the status draft failed.

    ``statuses_lost`` is True when the project was left without statuses.
    The editor keeps its draft, so calling ``save`` again is the retry.
    """

    code = "STATUS_SAVE_FAILED"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, message: str, *, statuses_lost: bool) -> None:
        super().__init__(message)
        self.statuses_lost = statuses_lost

    def to_detail(self) -> dict[str, object]:
        return {
            "code": self.code,
            "message": self.message,
            "statuses_lost": self.statuses_lost,
            "retryable": True,
        }
