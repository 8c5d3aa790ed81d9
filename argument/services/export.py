"""
Export Encoder.

Turns a note into something a clipboard or share target can take:
several encoded representations of its image, or a plain text block.

The clipboard chain tries every format independently. A format that fails
to encode is logged and left out; the remaining representations are all
offered together so the receiving app can pick the one it understands.
"""

import enum
import io
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Protocol

from PIL import Image, features

from argument.core.logging import get_logger
from argument.models.note import Note

logger = get_logger(__name__)

LOSSY_QUALITY = 0.9
"""Default compression quality for lossy formats, on a 0-1 scale."""

PNG_TAG = "image/png"
JPEG_TAG = "image/jpeg"
WEBP_TAG = "image/webp"

_PNG_MODES = frozenset({"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"})
_JPEG_MODES = frozenset({"1", "L", "RGB", "CMYK"})
_WEBP_MODES = frozenset({"RGB", "RGBA"})

SharePayload = Image.Image | str


class ClipboardSink(Protocol):
    """Where copied content ends up."""

    def set_content(self, representations: Mapping[str, bytes]) -> None:
        ...

    def set_text(self, text: str) -> None:
        ...


class ShareSink(Protocol):
    """A share target that accepts an image or a text block."""

    def present(self, payload: SharePayload) -> None:
        ...


class CopyOutcome(enum.Enum):
    IMAGE_COPIED = "image_copied"
    TEXT_COPIED = "text_copied"
    NOTHING_TO_COPY = "nothing_to_copy"


@dataclass(frozen=True)
class ClipboardContent:
    """Every representation that could be produced for one image."""

    representations: Mapping[str, bytes] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.representations

    @property
    def tags(self) -> list[str]:
        return list(self.representations)


def webp_supported() -> bool:
    """Whether the installed Pillow can write WebP."""
    return bool(features.check("webp"))


def _encode(image: Image.Image, fmt: str, **params: object) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=fmt, **params)
    return buffer.getvalue()


def _writable(image: Image.Image, modes: frozenset[str], keep_alpha: bool = True) -> Image.Image:
    """Convert ``image`` to RGB or RGBA unless its mode is in ``modes``."""
    if image.mode in modes:
        return image
    if keep_alpha and "A" in image.getbands():
        return image.convert("RGBA")
    return image.convert("RGB")


def encode_png(image: Image.Image, quality: float = LOSSY_QUALITY) -> bytes:
    return _encode(_writable(image, _PNG_MODES), "PNG")


def encode_jpeg(image: Image.Image, quality: float) -> bytes:
    image = _writable(image, _JPEG_MODES, keep_alpha=False)
    return _encode(image, "JPEG", quality=_pillow_quality(quality))


def encode_webp(image: Image.Image, quality: float) -> bytes:
    return _encode(_writable(image, _WEBP_MODES), "WEBP", quality=_pillow_quality(quality))


def _pillow_quality(quality: float) -> int:
    return round(min(max(quality, 0.0), 1.0) * 100)


Encoder = Callable[[Image.Image, float], bytes]


def clipboard_encoders() -> list[tuple[str, Encoder]]:
    """
    Formats to attempt, richest first.

    WebP is only listed when the codec reports support for it.
    """
    encoders: list[tuple[str, Encoder]] = [
        (PNG_TAG, encode_png),
        (JPEG_TAG, encode_jpeg),
    ]
    if webp_supported():
        encoders.append((WEBP_TAG, encode_webp))
    return encoders


def encode_for_clipboard(
    image: Image.Image,
    quality: float = LOSSY_QUALITY,
) -> ClipboardContent:
    """
    Encode ``image`` into every clipboard format that succeeds.

    An empty result means nothing could be copied.
    """
    representations: dict[str, bytes] = {}
    for tag, encoder in clipboard_encoders():
        try:
            representations[tag] = encoder(image, quality)
        except (OSError, ValueError, KeyError) as e:
            logger.warning(
                "Clipboard representation skipped",
                extra={"format": tag, "mode": image.mode, "error": str(e)},
            )
    return ClipboardContent(representations=representations)


def encode_for_share(note: Note) -> SharePayload:
    """
    Build the payload handed to a share target.

    Image notes with a readable image share the image; everything else
    shares the title, a blank line, then the content.
    """
    if note.is_image_note:
        image = note.decoded_image()
        if image is not None:
            return image
    return f"{note.title}\n\n{note.content}"


def copy_note(
    note: Note,
    sink: ClipboardSink,
    quality: float = LOSSY_QUALITY,
) -> CopyOutcome:
    """
    Place a note on the clipboard.

    Image notes offer all encoded representations at once; text notes
    copy their content. Callers must not report success on
    ``NOTHING_TO_COPY``.
    """
    if note.is_image_note:
        image = note.decoded_image()
        if image is None:
            logger.warning("Image note has no decodable image", extra={"note_id": note.id})
            return CopyOutcome.NOTHING_TO_COPY
        content = encode_for_clipboard(image, quality)
        if content.is_empty:
            logger.warning("No clipboard format could be produced", extra={"note_id": note.id})
            return CopyOutcome.NOTHING_TO_COPY
        sink.set_content(content.representations)
        logger.info("Image copied", extra={"note_id": note.id, "formats": content.tags})
        return CopyOutcome.IMAGE_COPIED

    if not note.content:
        return CopyOutcome.NOTHING_TO_COPY
    sink.set_text(note.content)
    logger.info("Text copied", extra={"note_id": note.id})
    return CopyOutcome.TEXT_COPIED


def share_note(note: Note, sink: ShareSink) -> bool:
    """Present a note to a share target. Returns False if it has nothing to share."""
    if not note.is_shareable:
        return False
    sink.present(encode_for_share(note))
    return True
