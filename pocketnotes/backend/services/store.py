"""
Note Store.

Durable storage and retrieval of notes in the embedded SQLite database.
Each operation is one round trip: one session, one transaction, no
caching and no locking beyond what SQLite does itself.

The store owns its engine. Open it once at startup and pass it to
whoever needs it:

    store = await NoteStore.open(get_database_url(), media=media)
    try:
        note = await store.create("Groceries", "milk, eggs")
    finally:
        await store.close()
"""

from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from pocketnotes.backend.core.database import create_engine, create_schema, create_session_factory
from pocketnotes.backend.core.exceptions import DatabaseError, MediaError, ValidationError
from pocketnotes.backend.core.logging import get_logger
from pocketnotes.backend.core.utils import iso_now
from pocketnotes.backend.models.note import MediaType
from pocketnotes.backend.repositories.note import NoteRepository
from pocketnotes.backend.schemas.note import NoteRecord
from pocketnotes.backend.services.media import MediaStorage

logger = get_logger(__name__)

T = TypeVar("T")


def _media_value(media_type: MediaType | str | None) -> str | None:
    if not media_type:
        return None
    try:
        return MediaType(media_type).value
    except ValueError as e:
        raise ValidationError(
            f"Unknown media type: {media_type}",
            details={"media_type": str(media_type)},
        ) from e


class NoteStore:
    """
    Create, read, update, delete and search notes.

    Update and delete match by id and are silent no-ops for ids that do not
    exist; their boolean result tells the caller whether a row matched.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        media: MediaStorage,
        clock: Callable[[], str] = iso_now,
    ) -> None:
        self._engine = engine
        self._session_factory = create_session_factory(engine)
        self._media = media
        self._clock = clock
        self._initialized = False

    @classmethod
    async def open(
        cls,
        database_url: str,
        media: MediaStorage,
        echo: bool = False,
        clock: Callable[[], str] = iso_now,
    ) -> "NoteStore":
        """
        Create the engine and the schema, failing fast.

        Raises:
            DatabaseError: If the database cannot be opened or the table
                cannot be created
        """
        engine = create_engine(database_url, echo=echo)
        store = cls(engine, media=media, clock=clock)
        try:
            await store.initialize()
        except DatabaseError:
            await engine.dispose()
            raise
        return store

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def media(self) -> MediaStorage:
        return self._media

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """Create the notes table if needed. Safe to call repeatedly."""
        if self._initialized:
            return
        try:
            await create_schema(self._engine)
        except SQLAlchemyError as e:
            logger.error("Database initialization failed", extra={"error": str(e)})
            raise DatabaseError("Database initialization failed") from e
        self._initialized = True
        logger.info("Database initialized")

    async def close(self) -> None:
        """Dispose of the engine and its connections."""
        await self._engine.dispose()
        self._initialized = False
        logger.debug("Database engine disposed")

    async def _execute(
        self,
        operation: str,
        work: Callable[[NoteRepository], Awaitable[T]],
    ) -> T:
        """
        Run one unit of work in its own session and transaction.

        Raises:
            DatabaseError: Wrapping any SQLAlchemy error
        """
        await self.initialize()
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    return await work(NoteRepository(session))
        except SQLAlchemyError as e:
            logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(f"Database operation failed: {operation}") from e

    async def ping(self) -> None:
        """Round trip to the database, for readiness checks."""
        async def work(repo: NoteRepository) -> None:
            await repo.session.execute(text("SELECT 1"))

        await self._execute("ping", work)

    async def create(
        self,
        title: str,
        content: str,
        media_path: str | None = None,
        media_type: MediaType | str | None = None,
    ) -> NoteRecord:
        """
        Insert a new note.

        createdAt and updatedAt are set to the same timestamp. An empty
        title is accepted here; rejecting it is the caller's job.

        Returns:
            The stored note, including its assigned id
        """
        now = self._clock()

        async def work(repo: NoteRepository) -> NoteRecord:
            note = await repo.create(
                title=title,
                content=content,
                media_path=media_path or None,
                media_type=_media_value(media_type),
                created_at=now,
                updated_at=now,
            )
            return NoteRecord.from_model(note)

        record = await self._execute("create", work)
        logger.debug("Note saved", extra={"note_id": record.id})
        return record

    async def read_all(self) -> list[NoteRecord]:
        """Every note, most recently updated first."""
        async def work(repo: NoteRepository) -> list[NoteRecord]:
            return [NoteRecord.from_model(note) for note in await repo.get_all()]

        return await self._execute("read_all", work)

    async def search(self, query: str) -> list[NoteRecord]:
        """
        Notes whose title or content contains query, ordered like read_all.

        An empty query matches every note.
        """
        async def work(repo: NoteRepository) -> list[NoteRecord]:
            return [NoteRecord.from_model(note) for note in await repo.search(query)]

        return await self._execute("search", work)

    async def get(self, note_id: int) -> NoteRecord | None:
        """A single note by id, or None."""
        async def work(repo: NoteRepository) -> NoteRecord | None:
            note = await repo.get_by_id_or_none(note_id)
            return NoteRecord.from_model(note) if note is not None else None

        return await self._execute("get", work)

    async def update(self, note: NoteRecord) -> bool:
        """
        Overwrite title, content and media of the note with note.id.

        updatedAt is refreshed; id and createdAt never change. The file
        of a replaced attachment is left where it is.

        Returns:
            False if no row has that id (nothing is written)
        """
        now = self._clock()

        async def work(repo: NoteRepository) -> int:
            return await repo.update_by_id(
                note.id,
                title=note.title,
                content=note.content,
                media_path=note.media_path or None,
                media_type=_media_value(note.media_type),
                updated_at=now,
            )

        updated = await self._execute("update", work)
        if not updated:
            logger.debug("Update matched no note", extra={"note_id": note.id})
        return bool(updated)

    async def delete(self, note: NoteRecord) -> bool:
        """
        Delete a note and, best effort, its attachment file.

        A failure to remove the file is logged and does not stop the row
        from being deleted.

        Returns:
            False if no row had that id
        """
        if note.media_path:
            try:
                await self._media.delete(note.media_path)
            except MediaError as e:
                logger.warning(
                    "Error deleting media file",
                    extra={"note_id": note.id, "path": note.media_path, "error": str(e)},
                )

        async def work(repo: NoteRepository) -> int:
            return await repo.delete_by_id(note.id)

        deleted = await self._execute("delete", work)
        if not deleted:
            logger.debug("Delete matched no note", extra={"note_id": note.id})
        return bool(deleted)


async def open_note_store() -> NoteStore:
    """
    Open the note store described by config/settings and POCKETNOTES_* overrides.

    Raises:
        DatabaseError: If the database cannot be initialized
    """
    from pocketnotes.backend.core.config import get_app_config, get_database_url, get_media_dir

    app_config = get_app_config()
    media = MediaStorage(
        get_media_dir(),
        default_image_suffix=app_config.media.default_image_suffix,
    )
    return await NoteStore.open(
        get_database_url(),
        media=media,
        echo=app_config.database.echo,
    )
