"""
Unit Tests for the Export Encoder.

Clipboard representations, share payloads and copy outcomes.
"""

import io
from unittest.mock import MagicMock, patch

import pytest
from PIL import Image

from argument.models.note import Note
from argument.services import export
from argument.services.export import (
    JPEG_TAG,
    LOSSY_QUALITY,
    PNG_TAG,
    WEBP_TAG,
    ClipboardContent,
    CopyOutcome,
    copy_note,
    encode_for_clipboard,
    encode_for_share,
    share_note,
)


def _decode(data: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


@pytest.fixture
def image() -> Image.Image:
    return Image.new("RGB", (64, 48), (30, 160, 90))


class RecordingClipboard:
    def __init__(self) -> None:
        self.content = None
        self.text = None

    def set_content(self, representations):
        self.content = dict(representations)

    def set_text(self, text):
        self.text = text


class TestEncodeForClipboard:
    """Tests for the multi-format chain."""

    def test_quality_constant(self):
        assert LOSSY_QUALITY == 0.9

    def test_valid_image_yields_png_and_jpeg(self, image):
        content = encode_for_clipboard(image)

        assert PNG_TAG in content.representations
        assert JPEG_TAG in content.representations
        assert not content.is_empty
        assert _decode(content.representations[PNG_TAG]).format == "PNG"
        assert _decode(content.representations[JPEG_TAG]).format == "JPEG"

    def test_png_is_lossless(self, image):
        content = encode_for_clipboard(image)

        decoded = _decode(content.representations[PNG_TAG]).convert("RGB")
        assert decoded.getpixel((0, 0)) == (30, 160, 90)

    def test_webp_omitted_when_unsupported(self, image):
        with patch.object(export, "webp_supported", return_value=False):
            content = encode_for_clipboard(image)

        assert WEBP_TAG not in content.representations
        assert content.tags == [PNG_TAG, JPEG_TAG]

    def test_webp_included_when_supported(self, image):
        if not export.webp_supported():
            pytest.skip("Pillow built without WebP")

        content = encode_for_clipboard(image)

        assert content.tags == [PNG_TAG, JPEG_TAG, WEBP_TAG]
        assert _decode(content.representations[WEBP_TAG]).format == "WEBP"

    def test_alpha_image_still_encodes_jpeg(self):
        rgba = Image.new("RGBA", (16, 16), (10, 20, 30, 128))

        content = encode_for_clipboard(rgba)

        assert JPEG_TAG in content.representations
        assert _decode(content.representations[PNG_TAG]).mode == "RGBA"

    def test_cmyk_jpeg_keeps_lossless_copy(self, image_bytes_factory):
        note = Note.create(
            title="Scan",
            image_data=image_bytes_factory(mode="CMYK", color=(0, 80, 160, 20), fmt="JPEG"),
        )
        decoded = note.decoded_image()
        assert decoded.mode == "CMYK"

        content = encode_for_clipboard(decoded)

        assert PNG_TAG in content.representations
        assert JPEG_TAG in content.representations
        assert _decode(content.representations[PNG_TAG]).mode == "RGB"

    @pytest.mark.parametrize(
        ("mode", "color"),
        [
            ("YCbCr", (120, 90, 200)),
            ("HSV", (10, 200, 200)),
        ],
    )
    def test_png_converts_unwritable_modes(self, mode, color):
        content = encode_for_clipboard(Image.new(mode, (8, 8), color))

        assert _decode(content.representations[PNG_TAG]).mode == "RGB"

    def test_lower_quality_gives_smaller_jpeg(self):
        noisy = Image.effect_noise((128, 128), 64).convert("RGB")

        high = encode_for_clipboard(noisy, quality=0.9).representations[JPEG_TAG]
        low = encode_for_clipboard(noisy, quality=0.3).representations[JPEG_TAG]

        assert len(low) < len(high)

    def test_failing_format_is_omitted(self, image, mock_logger):
        def broken(img, quality):
            raise OSError("encoder unavailable")

        encoders = [(PNG_TAG, broken), (JPEG_TAG, export.encode_jpeg)]
        with patch.object(export, "clipboard_encoders", return_value=encoders), \
                patch.object(export, "logger", mock_logger):
            content = encode_for_clipboard(image)

        assert content.tags == [JPEG_TAG]
        mock_logger.warning.assert_called_once()

    def test_total_failure_is_empty(self, image):
        def broken(img, quality):
            raise OSError("nope")

        with patch.object(export, "clipboard_encoders", return_value=[(PNG_TAG, broken)]):
            content = encode_for_clipboard(image)

        assert content.is_empty
        assert content.representations == {}


class TestEncodeForShare:
    """Tests for the share payload."""

    def test_image_note_shares_image(self, png_bytes):
        note = Note.create(title="Image", image_data=png_bytes)

        payload = encode_for_share(note)

        assert isinstance(payload, Image.Image)
        assert payload.size == (32, 24)

    def test_text_note_shares_text_block(self):
        note = Note.create(title="Titre", content="Contenu")

        assert encode_for_share(note) == "Titre\n\nContenu"

    def test_undecodable_image_falls_back_to_text(self, corrupt_image_bytes):
        note = Note.create(title="Cassée", image_data=corrupt_image_bytes)

        assert encode_for_share(note) == "Cassée\n\n"

    def test_share_note_presents_payload(self):
        sink = MagicMock()
        note = Note.create(title="T", content="C")

        assert share_note(note, sink) is True
        sink.present.assert_called_once_with("T\n\nC")

    def test_share_note_skips_empty_note(self):
        sink = MagicMock()

        assert share_note(Note.create(title="T"), sink) is False
        sink.present.assert_not_called()


class TestCopyNote:
    """Tests for clipboard copy outcomes."""

    def test_copy_image_note(self, png_bytes):
        clipboard = RecordingClipboard()
        note = Note.create(title="Image", image_data=png_bytes)

        outcome = copy_note(note, clipboard)

        assert outcome is CopyOutcome.IMAGE_COPIED
        assert PNG_TAG in clipboard.content
        assert JPEG_TAG in clipboard.content
        assert clipboard.text is None

    def test_copy_text_note(self):
        clipboard = RecordingClipboard()
        note = Note.create(title="Titre", content="Contenu")

        outcome = copy_note(note, clipboard)

        assert outcome is CopyOutcome.TEXT_COPIED
        assert clipboard.text == "Contenu"
        assert clipboard.content is None

    def test_copy_empty_note(self):
        clipboard = RecordingClipboard()

        outcome = copy_note(Note.create(title="T"), clipboard)

        assert outcome is CopyOutcome.NOTHING_TO_COPY
        assert clipboard.text is None

    def test_copy_undecodable_image(self, corrupt_image_bytes):
        clipboard = RecordingClipboard()
        note = Note.create(title="T", image_data=corrupt_image_bytes)

        assert copy_note(note, clipboard) is CopyOutcome.NOTHING_TO_COPY
        assert clipboard.content is None

    def test_copy_when_every_format_fails(self, png_bytes):
        clipboard = RecordingClipboard()
        note = Note.create(title="T", image_data=png_bytes)

        with patch.object(export, "encode_for_clipboard", return_value=ClipboardContent()):
            outcome = copy_note(note, clipboard)

        assert outcome is CopyOutcome.NOTHING_TO_COPY
        assert clipboard.content is None
