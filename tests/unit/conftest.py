"""
Unit Test Fixtures.

Fixtures for unit tests - the note store and media storage are mocked.
Unit tests should be fast and isolated, never touching a real database.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from pocketnotes.backend.models.note import MediaType
from pocketnotes.backend.schemas.note import MediaAttachment, NoteRecord


def make_note(note_id: int = 1, **overrides) -> NoteRecord:
    """Build a NoteRecord with sensible defaults."""
    values = {
        "id": note_id,
        "title": "Groceries",
        "content": "milk, eggs",
        "media_path": None,
        "media_type": None,
        "created_at": "2024-01-01T12:00:00.000000Z",
        "updated_at": "2024-01-01T12:00:00.000000Z",
    }
    values.update(overrides)
    return NoteRecord(**values)


@pytest.fixture
def note_factory():
    """Factory for NoteRecord instances: note_factory(2, title="Todo")."""
    return make_note


# =============================================================================
# Store Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_media() -> MagicMock:
    """
    Mock media storage.

    import_file returns an image attachment by default.
    """
    media = MagicMock()
    media.import_file = AsyncMock(
        return_value=MediaAttachment(path="/media/1700000000000.png", media_type=MediaType.IMAGE)
    )
    media.contains = MagicMock(return_value=True)
    media.delete = AsyncMock()
    media.resolve = AsyncMock()
    media.ensure_directory = AsyncMock()
    return media


@pytest.fixture
def mock_store(mock_media: MagicMock) -> MagicMock:
    """
    Mock note store.

    Usage:
        def test_service(mock_store: MagicMock):
            mock_store.get.return_value = make_note()
            service = NoteService(mock_store)
    """
    store = MagicMock()
    store.media = mock_media
    store.create = AsyncMock()
    store.read_all = AsyncMock(return_value=[])
    store.search = AsyncMock(return_value=[])
    store.get = AsyncMock(return_value=None)
    store.update = AsyncMock(return_value=True)
    store.delete = AsyncMock(return_value=True)
    store.ping = AsyncMock()
    return store
