"""
Note Model.

Database model for Argument notes. A note is either a text note or an
image note; the presence of ``image_data`` decides which.
"""

import io
from typing import Any
from uuid import uuid4

from PIL import Image
from sqlalchemy import LargeBinary, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from argument.core.logging import get_logger
from argument.core.utils import utc_now
from argument.models.base import Base, TimestampMixin, UUIDMixin

logger = get_logger(__name__)

PREVIEW_LENGTH = 100
IMAGE_PLACEHOLDER = "📷 Image"
EMPTY_PLACEHOLDER = "Note vide"


class Note(UUIDMixin, TimestampMixin, Base):
    """
    Note database model.

    Timestamps and the identifier are assigned at construction rather than
    at flush, so a freshly built note is complete before it is persisted.
    The model performs no validation: blank titles, or content alongside
    image bytes, are both accepted here and steered by the creation schema.
    """

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )
    image_data: Mapped[bytes | None] = mapped_column(
        LargeBinary,
        nullable=True,
    )

    def __init__(self, **kwargs: Any) -> None:
        now = utc_now()
        kwargs.setdefault("id", str(uuid4()))
        kwargs.setdefault("content", "")
        kwargs.setdefault("created_at", now)
        kwargs.setdefault("modified_at", kwargs["created_at"])
        super().__init__(**kwargs)

    @classmethod
    def create(
        cls,
        title: str,
        content: str = "",
        image_data: bytes | None = None,
    ) -> "Note":
        """Build a note stamped with the current time."""
        return cls(title=title, content=content, image_data=image_data)

    @property
    def is_image_note(self) -> bool:
        """True iff image bytes are attached, decodable or not."""
        return self.image_data is not None

    @property
    def is_shareable(self) -> bool:
        """Whether there is anything worth handing to a share target."""
        return bool(self.content) or self.is_image_note

    @property
    def content_preview(self) -> str:
        """
        Short description for list rows.

        Text wins over the image placeholder when both are present.
        Truncation counts code points, not bytes.
        """
        if self.content:
            return self.content[:PREVIEW_LENGTH]
        if self.image_data is not None:
            return IMAGE_PLACEHOLDER
        return EMPTY_PLACEHOLDER

    def decoded_image(self) -> Image.Image | None:
        """
        Decode the attached bytes into a Pillow image.

        Returns None when there is no payload or it is not a readable image.
        """
        if self.image_data is None:
            return None
        try:
            image = Image.open(io.BytesIO(self.image_data))
            image.load()
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
            logger.debug(
                "Image payload could not be decoded",
                extra={"note_id": self.id, "error": str(e)},
            )
            return None
        return image

    def touch_modified(self) -> None:
        """Refresh modified_at; never moves it backwards."""
        now = utc_now()
        if self.modified_at is None or now > self.modified_at:
            self.modified_at = now

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, image={self.is_image_note})>"
