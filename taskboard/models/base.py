"""
Base model classes and mixins.

Provides the declarative Base plus UUID, timestamp and position mixins.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class UUIDMixin:
    """Adds a UUID primary key generated client-side."""

    id: Mapped[UUID] = mapped_column(
        primary_key=True,
        default=uuid4,
        doc="Unique identifier for the record",
    )


class CreatedAtMixin:
    """Adds a server-populated ``created_at`` timestamp."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        doc="Timestamp when the record was created",
    )


class PositionMixin:
    """
    Adds the integer ``position`` used to order rows within a project.

    Positions are only guaranteed dense (0..n-1) right after the board
    engine renumbers them; inserts and deletes may leave gaps.
    """

    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        doc="Zero-based order within the owning project",
    )
