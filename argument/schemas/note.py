"""
Note Schemas.

Pydantic schemas for note command input and output.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _strip_title(value: object) -> object:
    if not isinstance(value, str):
        return value
    stripped = value.strip()
    if not stripped:
        raise ValueError("title must not be blank")
    return stripped


class NoteCreate(BaseModel):
    """
    Schema for creating a new note.

    The title is trimmed and must not be blank. Attaching an image clears
    any text content, so a new note is always in exactly one mode.
    """

    title: str = Field(
        ...,
        max_length=255,
        description="Note title",
        examples=["Argument important"],
    )
    content: str = Field(
        default="",
        description="Note text, ignored for image notes",
    )
    image_data: bytes | None = Field(
        default=None,
        description="Encoded image bytes",
    )

    @field_validator("title", mode="before")
    @classmethod
    def _title_not_blank(cls, value: object) -> object:
        return _strip_title(value)

    @model_validator(mode="after")
    def _image_replaces_text(self) -> "NoteCreate":
        if self.image_data is not None:
            self.content = ""
        return self


class NoteUpdate(BaseModel):
    """Schema for editing an existing note. Only set fields are applied."""

    title: str | None = Field(
        default=None,
        max_length=255,
        description="Note title",
    )
    content: str | None = Field(
        default=None,
        description="Note text",
    )

    @field_validator("title", mode="before")
    @classmethod
    def _title_not_blank(cls, value: object) -> object:
        return _strip_title(value)


class NoteResponse(BaseModel):
    """Schema for a note as returned by commands."""

    id: str = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note text")
    is_image_note: bool = Field(description="Whether image bytes are attached")
    content_preview: str = Field(description="Short description for list rows")
    created_at: datetime = Field(description="Creation timestamp")
    modified_at: datetime = Field(description="Last edit timestamp")

    model_config = ConfigDict(from_attributes=True)
