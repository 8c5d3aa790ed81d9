"""
Unit Tests for Note Schemas.

Creation rules and the outcome envelope.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from argument.core.exceptions import NotFoundError, ValidationError
from argument.models.note import Note
from argument.schemas.base import OperationResult
from argument.schemas.note import NoteCreate, NoteResponse, NoteUpdate


class TestNoteCreate:
    """Tests for note creation input."""

    def test_title_is_trimmed(self):
        data = NoteCreate(title="  Argument  ")

        assert data.title == "Argument"

    @pytest.mark.parametrize("title", ["", "   ", "\t "])
    def test_blank_title_rejected(self, title):
        with pytest.raises(PydanticValidationError):
            NoteCreate(title=title)

    def test_length_limit_applies_after_trimming(self):
        title = "a" * 255

        assert NoteCreate(title=f"  {title}  ").title == title

    def test_overlong_title_rejected(self):
        with pytest.raises(PydanticValidationError):
            NoteCreate(title="a" * 256)

    def test_image_clears_content(self, png_bytes):
        data = NoteCreate(title="T", content="ignored", image_data=png_bytes)

        assert data.content == ""
        assert data.image_data == png_bytes

    def test_text_note_keeps_content(self):
        data = NoteCreate(title="T", content="Contenu")

        assert data.content == "Contenu"
        assert data.image_data is None


class TestNoteUpdate:
    """Tests for edit input."""

    def test_unset_fields_are_excluded(self):
        data = NoteUpdate(content="Nouveau")

        assert data.model_dump(exclude_unset=True) == {"content": "Nouveau"}

    def test_blank_title_rejected(self):
        with pytest.raises(PydanticValidationError):
            NoteUpdate(title="  ")

    def test_title_trimmed(self):
        assert NoteUpdate(title=" Nouveau ").title == "Nouveau"

    def test_padded_title_at_limit_accepted(self):
        title = "b" * 255

        assert NoteUpdate(title=f" {title}\t").title == title


class TestNoteResponse:
    """Tests for the note output schema."""

    def test_from_model(self, png_bytes):
        note = Note.create(title="Image", image_data=png_bytes)

        response = NoteResponse.model_validate(note)

        assert response.id == note.id
        assert response.is_image_note is True
        assert response.content_preview == "📷 Image"
        assert response.modified_at == note.modified_at


class TestOperationResult:
    """Tests for the outcome envelope."""

    def test_ok(self):
        result = OperationResult[int].ok(3, operation="delete_notes")

        assert result.success is True
        assert result.data == 3
        assert result.error is None
        assert result.metadata.operation == "delete_notes"

    def test_fail_carries_code(self):
        result = OperationResult[int].fail(NotFoundError("Note not found"))

        assert result.success is False
        assert result.data is None
        assert result.error.code == "RES_NOT_FOUND"
        assert result.error.message == "Note not found"

    def test_fail_keeps_details(self):
        exc = ValidationError("bad", details={"field": "content"})

        result = OperationResult[int].fail(exc)

        assert result.error.details == {"field": "content"}
