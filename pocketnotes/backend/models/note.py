"""
Note Model.

Database model for notes. Column names are camelCase to match the table
layout shared with the mobile client.
"""

import enum

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from pocketnotes.backend.models.base import Base, TimestampMixin


class MediaType(str, enum.Enum):
    """Kind of file a note's mediaPath points at."""

    IMAGE = "image"
    DOCUMENT = "document"
    # Written by older app versions, no longer produced.
    AUDIO = "audio"


class Note(TimestampMixin, Base):
    """
    Note database model.

    A titled text record with an optional single attachment. The
    attachment lives on disk; only its path and type are stored here.
    """

    __tablename__ = "notes"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    content: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    media_path: Mapped[str | None] = mapped_column(
        "mediaPath",
        Text,
        nullable=True,
    )
    media_type: Mapped[str | None] = mapped_column(
        "mediaType",
        Text,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
