"""
Clipboard and share targets for the command line.

The terminal has no rich clipboard, so copied representations are written
to a directory, one file per format, and shared content is printed or
saved to a file.
"""

from collections.abc import Mapping
from pathlib import Path

from PIL import Image
from rich.console import Console

from argument.core.logging import get_logger
from argument.services.export import JPEG_TAG, PNG_TAG, WEBP_TAG, SharePayload, encode_png

logger = get_logger(__name__)

EXTENSIONS = {
    PNG_TAG: ".png",
    JPEG_TAG: ".jpg",
    WEBP_TAG: ".webp",
}


class DirectoryClipboard:
    """Writes each clipboard representation to ``<directory>/<stem><ext>``."""

    def __init__(self, directory: Path, stem: str) -> None:
        self.directory = directory
        self.stem = stem
        self.written: list[Path] = []

    def _write(self, name: str, data: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / name
        path.write_bytes(data)
        self.written.append(path)

    def set_content(self, representations: Mapping[str, bytes]) -> None:
        for tag, data in representations.items():
            self._write(f"{self.stem}{EXTENSIONS.get(tag, '.bin')}", data)
        logger.debug("Clipboard files written", extra={"files": [str(p) for p in self.written]})

    def set_text(self, text: str) -> None:
        self._write(f"{self.stem}.txt", text.encode("utf-8"))


class ConsoleShareTarget:
    """Prints text to the console, or saves it and images to ``output``."""

    def __init__(self, console: Console, output: Path | None = None) -> None:
        self.console = console
        self.output = output
        self.saved: Path | None = None

    def present(self, payload: SharePayload) -> None:
        if isinstance(payload, Image.Image):
            if self.output is None:
                raise ValueError("An output file is required to share an image")
            self.output.write_bytes(encode_png(payload))
            self.saved = self.output
            return
        if self.output is not None:
            self.output.write_text(payload, encoding="utf-8")
            self.saved = self.output
            return
        self.console.print(payload, markup=False, highlight=False)
