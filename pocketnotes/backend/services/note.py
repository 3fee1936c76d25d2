"""
Note Service.

Business logic layer for notes: validation, the blank-search rule,
not-found signalling, and attaching media before a note is saved.
"""

from pathlib import Path

from pocketnotes.backend.core.exceptions import NotFoundError, ValidationError
from pocketnotes.backend.models.note import MediaType
from pocketnotes.backend.schemas.note import MediaAttachment, NoteCreate, NoteRecord, NoteUpdate
from pocketnotes.backend.services.base import BaseService
from pocketnotes.backend.services.store import NoteStore


class NoteService(BaseService):
    """
    Service for note business logic.

    The store treats unknown ids as no-ops; this service turns them into
    NotFoundError so frontends can report them.
    """

    def __init__(self, store: NoteStore) -> None:
        super().__init__(store)

    def _validate_media_path(self, media_path: str | None) -> None:
        """
        Attachments must already be in media storage (see attach_media).

        Raises:
            ValidationError: If media_path points outside the media directory
        """
        if media_path and not self.store.media.contains(media_path):
            raise ValidationError(
                "Attachment must be uploaded to media storage first",
                details={"media_path": media_path},
            )

    async def attach_media(
        self,
        source: str | Path,
        media_type: MediaType | None = None,
        filename: str | None = None,
    ) -> MediaAttachment:
        """
        Copy a file into media storage so a note can reference it.

        Raises:
            MediaError: If the file cannot be copied
        """
        attachment = await self.store.media.import_file(
            source, media_type=media_type, filename=filename,
        )
        self._log_operation(
            "Media attached",
            path=attachment.path,
            media_type=attachment.media_type.value,
        )
        return attachment

    async def create_note(self, data: NoteCreate) -> NoteRecord:
        """
        Create a new note.

        Raises:
            ValidationError: If the title is blank or the attachment is not
                in media storage
        """
        self._validate_required({"title": data.title}, ["title"])
        self._validate_media_path(data.media_path)
        self._log_operation("Creating note", title=data.title)

        note = await self.store.create(
            title=data.title,
            content=data.content or "",
            media_path=data.media_path,
            media_type=data.media_type,
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def get_note(self, note_id: int) -> NoteRecord:
        """
        Get a note by id.

        Raises:
            NotFoundError: If note not found
        """
        note = await self.store.get(note_id)
        if note is None:
            raise NotFoundError("Note not found")
        return note

    async def list_notes(self) -> list[NoteRecord]:
        """All notes, most recently updated first."""
        return await self.store.read_all()

    async def search_notes(self, query: str) -> list[NoteRecord]:
        """
        Search notes by title or content.

        A blank query returns no results instead of every note.
        """
        if not query.strip():
            return []
        self._log_debug("Searching notes", query=query)
        return await self.store.search(query)

    async def update_note(self, note_id: int, data: NoteUpdate) -> NoteRecord:
        """
        Update an existing note. Only fields set on data change.

        The file of a replaced attachment is not removed.

        Raises:
            NotFoundError: If note not found
            ValidationError: If the new title is blank or the new attachment
                is not in media storage
        """
        note = await self.get_note(note_id)
        changes = data.model_dump(exclude_unset=True)

        if not changes:
            return note

        if "title" in changes:
            self._validate_required(changes, ["title"])
        self._validate_media_path(changes.get("media_path"))

        self._log_operation(
            "Updating note",
            note_id=note_id,
            fields=sorted(changes),
        )

        updated = note.model_copy(update=changes)
        if not await self.store.update(updated):
            raise NotFoundError("Note not found")

        return await self.get_note(note_id)

    async def delete_note(self, note_id: int) -> None:
        """
        Delete a note and its attachment file.

        Raises:
            NotFoundError: If note not found
        """
        note = await self.get_note(note_id)
        self._log_operation("Deleting note", note_id=note_id)
        await self.store.delete(note)
