"""
Note Schemas.

Pydantic schemas for note records and API request/response validation.
Fields serialize with camelCase names (mediaPath, createdAt, ...) and
accept either camelCase or snake_case on input.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pocketnotes.backend.core.logging import get_logger
from pocketnotes.backend.models.note import MediaType, Note

logger = get_logger(__name__)


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


def _known_media_type(note: Note) -> MediaType | None:
    """Stored mediaType as a MediaType; values this version does not know read as None."""
    if not note.media_type:
        return None
    try:
        return MediaType(note.media_type)
    except ValueError:
        logger.warning(
            "Ignoring unknown media type",
            extra={"note_id": note.id, "media_type": note.media_type},
        )
        return None


class NoteRecord(_CamelModel):
    """
    A stored note, detached from any database session.

    This is what the note store hands back to callers.
    An attachment kind this version does not know reads as no kind at all.
    """

    id: int = Field(description="Store-assigned identifier")
    title: str = Field(description="Note title")
    content: str | None = Field(default=None, description="Note body")
    media_path: str | None = Field(default=None, description="Attachment location on disk")
    media_type: MediaType | None = Field(default=None, description="Attachment kind")
    created_at: str = Field(description="Creation timestamp (ISO-8601)")
    updated_at: str = Field(description="Last update timestamp (ISO-8601)")

    @classmethod
    def from_model(cls, note: Note) -> "NoteRecord":
        return cls(
            id=note.id,
            title=note.title,
            content=note.content,
            media_path=note.media_path,
            media_type=_known_media_type(note),
            created_at=note.created_at,
            updated_at=note.updated_at,
        )


class NoteCreate(_CamelModel):
    """Schema for creating a new note."""

    title: str = Field(
        ...,
        min_length=1,
        description="Note title",
        examples=["Groceries"],
    )
    content: str = Field(
        default="",
        description="Note content",
        examples=["milk, eggs"],
    )
    media_path: str | None = Field(
        default=None,
        description="Path returned by the media upload endpoint",
    )
    media_type: MediaType | None = Field(
        default=None,
        description="Kind of the attached file",
    )


class NoteUpdate(_CamelModel):
    """Schema for updating an existing note. Only provided fields change."""

    title: str | None = Field(
        default=None,
        min_length=1,
        description="Note title",
    )
    content: str | None = Field(
        default=None,
        description="Note content",
    )
    media_path: str | None = Field(
        default=None,
        description="Replacement attachment path",
    )
    media_type: MediaType | None = Field(
        default=None,
        description="Replacement attachment kind",
    )


class MediaAttachment(_CamelModel):
    """A file copied into app-managed storage, ready to be referenced by a note."""

    path: str = Field(description="Location of the stored copy")
    media_type: MediaType = Field(description="Attachment kind")