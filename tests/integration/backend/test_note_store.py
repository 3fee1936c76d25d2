"""
Integration Tests for the Note Store.

Runs against a real SQLite file per test (see tests/conftest.py).
"""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from pocketnotes.backend.core.exceptions import DatabaseError, MediaError, ValidationError
from pocketnotes.backend.models.note import MediaType
from pocketnotes.backend.repositories.note import NoteRepository
from pocketnotes.backend.services.media import MediaStorage
from pocketnotes.backend.services.store import NoteStore

pytestmark = pytest.mark.integration


class TestOpen:
    """Tests for store lifecycle."""

    async def test_open_creates_notes_table(self, note_store: NoteStore):
        async with note_store.engine.connect() as conn:
            result = await conn.execute(
                text("SELECT name FROM sqlite_master WHERE type='table' AND name='notes'")
            )
            assert result.scalar_one() == "notes"

    async def test_open_creates_missing_database_directory(self, tmp_path: Path, media_storage):
        db_path = tmp_path / "nested" / "dir" / "notes.db"

        store = await NoteStore.open(f"sqlite+aiosqlite:///{db_path}", media=media_storage)
        try:
            assert store.initialized
            assert db_path.exists()
        finally:
            await store.close()

    async def test_open_fails_fast_when_database_cannot_be_opened(self, tmp_path: Path, media_storage):
        """A directory is not a database file."""
        with pytest.raises(DatabaseError) as exc_info:
            await NoteStore.open(f"sqlite+aiosqlite:///{tmp_path}", media=media_storage)

        assert exc_info.value.code == "SYS_DATABASE_ERROR"
        assert exc_info.value.__cause__ is not None

    async def test_initialize_is_idempotent(self, note_store: NoteStore):
        await note_store.create("Kept", "body")

        await note_store.initialize()
        await note_store.initialize()

        assert len(await note_store.read_all()) == 1

    async def test_directly_constructed_store_initializes_on_first_use(
        self, database_url: str, media_storage: MediaStorage
    ):
        from pocketnotes.backend.core.database import create_engine

        store = NoteStore(create_engine(database_url), media=media_storage)
        try:
            assert not store.initialized

            notes = await store.read_all()

            assert notes == []
            assert store.initialized
        finally:
            await store.close()

    async def test_data_survives_reopen(self, database_url: str, media_storage: MediaStorage):
        store = await NoteStore.open(database_url, media=media_storage)
        await store.create("Persistent", "still here")
        await store.close()

        reopened = await NoteStore.open(database_url, media=media_storage)
        try:
            notes = await reopened.read_all()
        finally:
            await reopened.close()

        assert [n.title for n in notes] == ["Persistent"]


class TestCreate:
    """Tests for NoteStore.create."""

    async def test_create_then_read_all(self, note_store: NoteStore):
        note = await note_store.create("Groceries", "milk, eggs")

        notes = await note_store.read_all()

        assert len(notes) == 1
        assert notes[0].id == note.id
        assert notes[0].title == "Groceries"
        assert notes[0].content == "milk, eggs"
        assert notes[0].created_at == notes[0].updated_at
        assert notes[0].media_path is None
        assert notes[0].media_type is None

    async def test_ids_are_fresh(self, note_store: NoteStore):
        first = await note_store.create("One", "")
        second = await note_store.create("Two", "")

        assert second.id > first.id

    async def test_ids_are_not_reused_after_delete(self, note_store: NoteStore):
        first = await note_store.create("One", "")
        await note_store.delete(first)

        second = await note_store.create("Two", "")

        assert second.id > first.id

    async def test_empty_title_and_content_accepted(self, note_store: NoteStore):
        note = await note_store.create("", "")

        assert note.title == ""
        assert note.content == ""

    async def test_create_with_media(self, note_store: NoteStore):
        note = await note_store.create(
            "Receipt", "", media_path="/tmp/1.jpg", media_type=MediaType.IMAGE
        )

        stored = await note_store.get(note.id)
        assert stored.media_path == "/tmp/1.jpg"
        assert stored.media_type == MediaType.IMAGE

    async def test_timestamps_use_real_clock_by_default(
        self, database_url: str, media_storage: MediaStorage
    ):
        store = await NoteStore.open(database_url, media=media_storage)
        try:
            note = await store.create("Now", "")
        finally:
            await store.close()

        assert note.created_at.endswith("Z")
        assert len(note.created_at) == len("2024-01-01T00:00:00.000000Z")


class TestReadAllOrdering:
    """Tests for ordering of read_all."""

    async def test_most_recently_updated_first(self, note_store: NoteStore):
        t1 = await note_store.create("first", "")
        t2 = await note_store.create("second", "")
        t3 = await note_store.create("third", "")

        notes = await note_store.read_all()

        assert [n.id for n in notes] == [t3.id, t2.id, t1.id]

    async def test_update_moves_note_to_front(self, note_store: NoteStore):
        old = await note_store.create("old", "")
        await note_store.create("newer", "")

        await note_store.update(old.model_copy(update={"content": "touched"}))

        notes = await note_store.read_all()
        assert notes[0].id == old.id

    async def test_equal_timestamps_newest_id_first(
        self, database_url: str, media_storage: MediaStorage
    ):
        store = await NoteStore.open(
            database_url, media=media_storage, clock=lambda: "2024-01-01T00:00:00.000000Z"
        )
        try:
            a = await store.create("a", "")
            b = await store.create("b", "")
            notes = await store.read_all()
        finally:
            await store.close()

        assert [n.id for n in notes] == [b.id, a.id]

    async def test_empty_table(self, note_store: NoteStore):
        assert await note_store.read_all() == []


class TestSearch:
    """Tests for NoteStore.search."""

    @pytest.fixture
    async def seeded(self, note_store: NoteStore):
        a = await note_store.create("Groceries", "milk, eggs")
        b = await note_store.create("Todo", "call dentist")
        return a, b

    async def test_matches_content(self, note_store: NoteStore, seeded):
        a, b = seeded

        assert [n.id for n in await note_store.search("call")] == [b.id]
        assert [n.id for n in await note_store.search("milk")] == [a.id]

    async def test_read_all_order_matches_creation(self, note_store: NoteStore, seeded):
        a, b = seeded

        assert [n.id for n in await note_store.read_all()] == [b.id, a.id]

    async def test_matches_title_case_insensitively(self, note_store: NoteStore, seeded):
        a, _ = seeded

        assert [n.id for n in await note_store.search("GROCER")] == [a.id]

    async def test_empty_query_returns_everything(self, note_store: NoteStore, seeded):
        a, b = seeded

        assert [n.id for n in await note_store.search("")] == [b.id, a.id]

    async def test_no_match(self, note_store: NoteStore, seeded):
        assert await note_store.search("xyz-not-present") == []

    async def test_wildcards_are_not_escaped(self, note_store: NoteStore, seeded):
        a, b = seeded

        assert len(await note_store.search("%")) == 2
        assert [n.id for n in await note_store.search("m_lk")] == [a.id]


class TestUpdate:
    """Tests for NoteStore.update."""

    async def test_update_title(self, note_store: NoteStore):
        note = await note_store.create("Draft", "body")

        updated = await note_store.update(note.model_copy(update={"title": "Final"}))

        assert updated is True
        notes = await note_store.read_all()
        assert len(notes) == 1
        assert notes[0].id == note.id
        assert notes[0].title == "Final"
        assert notes[0].created_at == note.created_at
        assert notes[0].updated_at > note.updated_at

    async def test_missing_id_is_silent_no_op(self, note_store: NoteStore):
        existing = await note_store.create("Existing", "body")
        before = await note_store.read_all()
        ghost = existing.model_copy(update={"id": 999, "title": "Ghost"})

        updated = await note_store.update(ghost)

        assert updated is False
        assert await note_store.read_all() == before

    async def test_clears_media(self, note_store: NoteStore):
        note = await note_store.create(
            "Receipt", "", media_path="/tmp/1.jpg", media_type=MediaType.IMAGE
        )

        await note_store.update(note.model_copy(update={"media_path": None, "media_type": None}))

        stored = await note_store.get(note.id)
        assert stored.media_path is None
        assert stored.media_type is None

    async def test_replaced_media_file_stays_on_disk(
        self, note_store: NoteStore, image_file: Path, document_file: Path
    ):
        first = await note_store.media.import_file(image_file)
        second = await note_store.media.import_file(document_file)
        note = await note_store.create(
            "Scan", "", media_path=first.path, media_type=first.media_type
        )

        await note_store.update(
            note.model_copy(update={"media_path": second.path, "media_type": second.media_type})
        )

        assert Path(first.path).exists()
        assert (await note_store.get(note.id)).media_path == second.path


class TestDelete:
    """Tests for NoteStore.delete."""

    async def test_delete_removes_row(self, note_store: NoteStore):
        keep = await note_store.create("Keep", "")
        gone = await note_store.create("Gone", "")

        deleted = await note_store.delete(gone)

        assert deleted is True
        assert [n.id for n in await note_store.read_all()] == [keep.id]

    async def test_delete_removes_media_file(self, note_store: NoteStore, image_file: Path):
        attachment = await note_store.media.import_file(image_file)
        note = await note_store.create(
            "Receipt", "", media_path=attachment.path, media_type=attachment.media_type
        )

        await note_store.delete(note)

        assert not Path(attachment.path).exists()
        assert await note_store.get(note.id) is None

    async def test_missing_id_is_silent_no_op(self, note_store: NoteStore):
        existing = await note_store.create("Existing", "")
        ghost = existing.model_copy(update={"id": 999})

        deleted = await note_store.delete(ghost)

        assert deleted is False
        assert [n.id for n in await note_store.read_all()] == [existing.id]

    async def test_media_failure_does_not_block_row_delete(self, note_store: NoteStore):
        note = await note_store.create(
            "Broken",
            "",
            media_path=str(note_store.media.directory / "missing.jpg"),
            media_type=MediaType.IMAGE,
        )

        deleted = await note_store.delete(note)

        assert deleted is True
        assert await note_store.read_all() == []

    async def test_media_error_is_swallowed(self, note_store: NoteStore):
        note = await note_store.create(
            "Locked", "", media_path="/tmp/locked.pdf", media_type=MediaType.DOCUMENT
        )

        with patch.object(
            note_store.media, "delete", AsyncMock(side_effect=MediaError("denied"))
        ) as mock_delete:
            deleted = await note_store.delete(note)

        mock_delete.assert_awaited_once_with("/tmp/locked.pdf")
        assert deleted is True

    async def test_file_outside_media_directory_is_kept(
        self, note_store: NoteStore, document_file: Path
    ):
        """Rows written before attachments were checked may point anywhere."""
        note = await note_store.create(
            "Legacy", "", media_path=str(document_file), media_type=MediaType.DOCUMENT
        )

        deleted = await note_store.delete(note)

        assert deleted is True
        assert document_file.exists()


class TestErrors:
    """Storage failures surface as DatabaseError."""

    async def test_read_error_wrapped(self, note_store: NoteStore):
        boom = OperationalError("SELECT", {}, Exception("disk I/O error"))

        with patch.object(NoteRepository, "get_all", AsyncMock(side_effect=boom)):
            with pytest.raises(DatabaseError) as exc_info:
                await note_store.read_all()

        assert exc_info.value.__cause__ is boom

    async def test_write_error_wrapped(self, note_store: NoteStore):
        boom = OperationalError("INSERT", {}, Exception("database is locked"))

        with patch.object(NoteRepository, "create", AsyncMock(side_effect=boom)):
            with pytest.raises(DatabaseError):
                await note_store.create("Never", "")

        assert await note_store.read_all() == []


class TestLegacyRows:
    """Rows written by older app versions."""

    async def test_audio_media_type_reads_back(self, note_store: NoteStore):
        async with note_store.engine.begin() as conn:
            await conn.execute(
                text(
                    'INSERT INTO notes (title, content, "mediaPath", "mediaType", '
                    '"createdAt", "updatedAt") VALUES (:t, :c, :p, :m, :ts, :ts)'
                ),
                {
                    "t": "Memo",
                    "c": None,
                    "p": "/old/rec.m4a",
                    "m": "audio",
                    "ts": "2023-06-01T10:00:00.000000Z",
                },
            )

        notes = await note_store.read_all()

        assert notes[0].media_type == MediaType.AUDIO
        assert notes[0].content is None

    async def test_unknown_media_type_reads_as_none(self, note_store: NoteStore):
        async with note_store.engine.begin() as conn:
            await conn.execute(
                text(
                    'INSERT INTO notes (title, content, "mediaPath", "mediaType", '
                    '"createdAt", "updatedAt") VALUES (:t, :c, :p, :m, :ts, :ts)'
                ),
                {
                    "t": "Clip",
                    "c": "holiday",
                    "p": "/old/clip.mp4",
                    "m": "video",
                    "ts": "2023-06-01T10:00:00.000000Z",
                },
            )

        notes = await note_store.read_all()
        found = await note_store.search("holiday")

        assert notes[0].media_type is None
        assert notes[0].media_path == "/old/clip.mp4"
        assert [n.id for n in found] == [notes[0].id]

    async def test_create_with_unknown_media_type_rejected(self, note_store: NoteStore):
        with pytest.raises(ValidationError) as exc_info:
            await note_store.create("Clip", "", media_path="/old/clip.mp4", media_type="video")

        assert exc_info.value.details == {"media_type": "video"}
        assert await note_store.read_all() == []
