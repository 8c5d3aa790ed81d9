"""
Note Repository.

Data access layer for notes. Handles all database operations
for the Note model.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from argument.models.note import Note
from argument.repositories.base import BaseRepository


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits standard CRUD operations from BaseRepository
    and adds the recency ordering used by the note list.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_all_by_recency(self) -> list[Note]:
        """
        Get every note, most recently modified first.

        Ties on modified_at are broken by id so the order is stable
        across queries.
        """
        result = await self.session.execute(
            select(Note).order_by(Note.modified_at.desc(), Note.id.asc())
        )
        return list(result.scalars().all())
