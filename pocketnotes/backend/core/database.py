"""
Database Configuration.

SQLAlchemy async engine and session factory for the embedded SQLite
database. There is no module-level engine: the note store owns the
engine it creates here and disposes it on shutdown.
"""

from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from pocketnotes.backend.core.logging import get_logger
from pocketnotes.backend.models.base import Base

logger = get_logger(__name__)


def _ensure_sqlite_directory(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return
    database = url.database
    if not database or database == ":memory:":
        return
    Path(database).expanduser().parent.mkdir(parents=True, exist_ok=True)


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create the async engine for the notes database.

    Args:
        database_url: SQLAlchemy URL, e.g. sqlite+aiosqlite:///data/notes.db
        echo: Log every SQL statement

    Returns:
        AsyncEngine bound to the database
    """
    _ensure_sqlite_directory(database_url)
    engine = create_async_engine(database_url, echo=echo)
    logger.debug(
        "Database engine created",
        extra={"url": engine.url.render_as_string(hide_password=True)},
    )
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory whose instances stay usable after commit."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create every table that does not exist yet (CREATE TABLE IF NOT EXISTS)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
