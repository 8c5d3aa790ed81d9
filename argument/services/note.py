"""
Note Service.

Business logic layer for notes. Every mutating command commits its own
change and returns an OperationResult instead of raising.
"""

from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from argument.core.exceptions import ValidationError
from argument.models.note import Note
from argument.repositories.note import NoteRepository
from argument.schemas.base import OperationResult
from argument.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from argument.services.base import BaseService
from argument.services.note_view import filter_notes


class NoteService(BaseService):
    """
    Service for note business logic.

    Handles note creation, edits, deletion and the searchable list.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)

    async def create_note(self, data: NoteCreate) -> OperationResult[NoteResponse]:
        """
        Create a new note.

        Args:
            data: Validated creation data (title trimmed, mode resolved)

        Returns:
            Result carrying the created note
        """
        self._log_operation(
            "Creating note",
            title=data.title,
            image=data.image_data is not None,
        )

        async def command() -> NoteResponse:
            note = Note.create(
                title=data.title,
                content=data.content,
                image_data=data.image_data,
            )
            await self.repo.add(note)
            self._log_debug("Note created", note_id=note.id)
            return NoteResponse.model_validate(note)

        return await self._run_command("create_note", command)

    async def get_note(self, note_id: str) -> Note:
        """
        Get a note by ID.

        Raises:
            NotFoundError: If note not found
        """
        return await self._execute_db_operation(
            "get_note",
            self.repo.get_by_id(note_id),
        )

    async def list_notes(self, search: str = "") -> list[Note]:
        """
        List notes, most recently modified first, narrowed by ``search``.

        Args:
            search: Case-insensitive term matched against title or content

        Returns:
            Ordered list of matching notes
        """
        notes = await self._execute_db_operation(
            "list_notes",
            self.repo.get_all_by_recency(),
        )
        if search:
            self._log_debug("Searching notes", query=search)
        return filter_notes(notes, search)

    async def edit_note(self, note_id: str, data: NoteUpdate) -> OperationResult[NoteResponse]:
        """
        Apply an edit and refresh the modification date.

        Image notes have no editable text, so a content patch on one is
        rejected. An empty patch still counts as a save.

        Returns:
            Result carrying the edited note, or the failure
        """
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)

        self._log_operation(
            "Editing note",
            note_id=note_id,
            fields=list(update_data.keys()),
        )

        async def command() -> NoteResponse:
            note = await self.repo.get_by_id(note_id)
            if "content" in update_data and note.is_image_note:
                raise ValidationError(
                    "Image notes have no editable text",
                    details={"note_id": note_id},
                )
            for key, value in update_data.items():
                setattr(note, key, value)
            note.touch_modified()
            await self.session.flush()
            return NoteResponse.model_validate(note)

        return await self._run_command("edit_note", command)

    async def delete_note(self, note_id: str) -> OperationResult[bool]:
        """
        Delete a note.

        Deleting an id that is already gone succeeds with ``data=False``.
        """
        self._log_operation("Deleting note", note_id=note_id)

        async def command() -> bool:
            return await self.repo.delete_if_exists(note_id)

        return await self._run_command("delete_note", command)

    async def delete_notes(self, note_ids: Iterable[str]) -> OperationResult[int]:
        """
        Delete several notes in one commit.

        Returns:
            Result carrying how many notes were actually removed
        """
        targets = list(dict.fromkeys(note_ids))
        self._log_operation("Deleting notes", count=len(targets))

        async def command() -> int:
            removed = 0
            for note_id in targets:
                if await self.repo.delete_if_exists(note_id):
                    removed += 1
            return removed

        return await self._run_command("delete_notes", command)
