"""
SQLAlchemy Base Model.

Base class for all database models with common fields and utilities.
"""

from sqlalchemy import Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from pocketnotes.backend.core.utils import iso_now


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class TimestampMixin:
    """
    Mixin that adds createdAt and updatedAt columns.

    Timestamps are ISO-8601 text, not DateTime, so that rows written by
    other clients of the same database file compare and sort the same way.
    """

    created_at: Mapped[str] = mapped_column(
        "createdAt",
        Text,
        default=iso_now,
        nullable=False,
    )
    updated_at: Mapped[str] = mapped_column(
        "updatedAt",
        Text,
        default=iso_now,
        nullable=False,
    )
