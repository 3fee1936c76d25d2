"""
Note Repository.

Data access layer for notes. Issues the parameterized statements for a
single session; the note store decides when sessions open and commit.
"""

from sqlalchemy import delete, desc, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pocketnotes.backend.models.note import Note


class NoteRepository:
    """
    Repository for the Note model.

    Listing and search share one ordering: most recently updated first,
    newest id first among equal timestamps.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _ordered(self):
        return select(Note).order_by(desc(Note.updated_at), desc(Note.id))

    async def create(self, **kwargs) -> Note:
        """Insert a note and return it with its assigned id."""
        instance = Note(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        return instance

    async def get_by_id_or_none(self, note_id: int) -> Note | None:
        """Get a single note by id, returning None if not found."""
        result = await self.session.execute(
            select(Note).where(Note.id == note_id)
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> list[Note]:
        """Every note, most recently updated first."""
        result = await self.session.execute(self._ordered())
        return list(result.scalars().all())

    async def search(self, query: str) -> list[Note]:
        """
        Notes whose title or content contains the query.

        The query is wrapped as %query% and matched with LIKE, which SQLite
        compares case-insensitively for ASCII. It is not escaped, so % and
        _ inside the query act as wildcards.

        Args:
            query: Substring to look for

        Returns:
            Matching notes, ordered like get_all
        """
        pattern = f"%{query}%"
        result = await self.session.execute(
            self._ordered().where(
                or_(Note.title.like(pattern), Note.content.like(pattern))
            )
        )
        return list(result.scalars().all())

    async def update_by_id(self, note_id: int, **values) -> int:
        """
        Overwrite columns of the row with the given id.

        Returns:
            Number of rows affected (0 when the id does not exist)
        """
        result = await self.session.execute(
            update(Note)
            .where(Note.id == note_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def delete_by_id(self, note_id: int) -> int:
        """
        Delete the row with the given id.

        Returns:
            Number of rows affected (0 when the id does not exist)
        """
        result = await self.session.execute(
            delete(Note)
            .where(Note.id == note_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
