"""
Root Test Configuration.

Shared fixtures for all test types. Every test gets its own SQLite file
and media directory under tmp_path, so nothing touches data/.
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from pocketnotes.backend.core.config import get_app_config, get_settings
from pocketnotes.backend.core.utils import TIMESTAMP_FORMAT
from pocketnotes.backend.services.media import MediaStorage
from pocketnotes.backend.services.store import NoteStore


@pytest.fixture(autouse=True)
def _clear_config_cache():
    """Environment overrides set by a test must not leak into the next one."""
    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


class StepClock:
    """
    Deterministic clock for the note store.

    Every call returns a timestamp one second after the previous one, so
    ordering by updatedAt never depends on the speed of the machine.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2024, 1, 1, 12, 0, 0)
        self.calls = 0

    def __call__(self) -> str:
        value = self.current.strftime(TIMESTAMP_FORMAT)
        self.current += timedelta(seconds=1)
        self.calls += 1
        return value


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """aiosqlite URL of a database file private to the test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}"


@pytest.fixture
def media_dir(tmp_path: Path) -> Path:
    """Media directory private to the test (not created yet)."""
    return tmp_path / "media"


@pytest.fixture
def media_storage(media_dir: Path) -> MediaStorage:
    return MediaStorage(media_dir)


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
async def note_store(
    database_url: str,
    media_storage: MediaStorage,
    clock: StepClock,
) -> AsyncGenerator[NoteStore, None]:
    """
    An open note store on a fresh database.

    Usage:
        async def test_create(note_store: NoteStore):
            note = await note_store.create("Title", "Body")
            assert note.id == 1
    """
    store = await NoteStore.open(database_url, media=media_storage, clock=clock)
    try:
        yield store
    finally:
        await store.close()


# =============================================================================
# File Fixtures
# =============================================================================


@pytest.fixture
def image_file(tmp_path: Path) -> Path:
    """A small file with an image extension, outside media storage."""
    path = tmp_path / "picked" / "receipt.png"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\x89PNG\r\n\x1a\nfake")
    return path


@pytest.fixture
def document_file(tmp_path: Path) -> Path:
    """A small file with a document extension, outside media storage."""
    path = tmp_path / "picked" / "contract.pdf"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"%PDF-1.4 fake")
    return path
