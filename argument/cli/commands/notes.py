"""
Note Commands.

Create, list, search, edit, delete, copy and share notes.
"""

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import NoReturn, Optional, TypeVar

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from argument.cli.sinks import ConsoleShareTarget, DirectoryClipboard
from argument.core.config import get_app_config
from argument.core.database import dispose_engine, session_scope
from argument.core.exceptions import ApplicationError
from argument.core.logging import get_logger, log_with_source
from argument.models.note import EMPTY_PLACEHOLDER, Note
from argument.schemas.base import OperationResult
from argument.schemas.note import NoteCreate, NoteUpdate
from argument.services.export import CopyOutcome, copy_note, share_note
from argument.services.note import NoteService

app = typer.Typer(help="Note commands")
console = Console()
logger = get_logger(__name__)

T = TypeVar("T")


def _run(command: Callable[[NoteService], Awaitable[T]]) -> T:
    """Run one command against a fresh session, then release the engine."""

    async def runner() -> T:
        try:
            async with session_scope() as session:
                return await command(NoteService(session))
        finally:
            await dispose_engine()

    return asyncio.run(runner())


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error: {escape(message)}[/red]")
    raise typer.Exit(1)


def _check(result: OperationResult) -> None:
    if not result.success:
        _fail(result.error.message)


async def _load(service: NoteService, note_id: str) -> Note:
    try:
        return await service.get_note(note_id)
    except ApplicationError as e:
        _fail(e.message)


@app.command()
def add(
    title: str = typer.Argument(..., help="Note title"),
    content: str = typer.Option("", "--content", "-c", help="Note text"),
    image: Optional[Path] = typer.Option(
        None,
        "--image",
        "-i",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Image file to attach instead of text",
    ),
) -> None:
    """
    Create a new note.

    Examples:
        argument notes add "Argument important" -c "Contenu"
        argument notes add "Schéma" -i schema.png
    """
    image_data = image.read_bytes() if image is not None else None
    if image_data is not None and content:
        console.print("[yellow]Text content is ignored for image notes[/yellow]")

    try:
        data = NoteCreate(title=title, content=content, image_data=image_data)
    except PydanticValidationError as e:
        _fail(e.errors()[0]["msg"])

    result = _run(lambda service: service.create_note(data))
    _check(result)
    log_with_source(logger, "cli", "info", "Note created", note_id=result.data.id)
    console.print(f"Created note {result.data.id}")


@app.command("list")
def list_notes(
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Filter by title or content"),
) -> None:
    """
    List notes, most recently modified first.
    """
    term = search if search is not None else get_app_config().notes.listing.default_search
    notes = _run(lambda service: service.list_notes(search=term))

    if not notes:
        console.print("[dim]No notes[/dim]")
        return

    console.rule("Arguments")
    for note in notes:
        console.print(Text.assemble((note.title, "bold"), "  ", (note.id, "cyan")))
        console.print(
            Text(note.content_preview, style="dim"),
            no_wrap=True,
            overflow="ellipsis",
        )
        console.print(
            f"[dim]modified {note.modified_at:%Y-%m-%d %H:%M}[/dim]\n",
        )


@app.command()
def show(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """
    Display a single note.
    """

    async def command(service: NoteService) -> Note:
        return await _load(service, note_id)

    note = _run(command)
    if note.is_image_note:
        image = note.decoded_image()
        body = (
            f"Image {image.width}x{image.height} ({image.format})"
            if image is not None
            else "Image could not be decoded"
        )
    else:
        body = Text(note.content) if note.content else Text(EMPTY_PLACEHOLDER, style="italic")

    console.print(Panel(body, title=Text(note.title)))
    console.print(
        f"[dim]Created {note.created_at:%Y-%m-%d %H:%M} · "
        f"modified {note.modified_at:%Y-%m-%d %H:%M}[/dim]"
    )


@app.command()
def edit(
    note_id: str = typer.Argument(..., help="Note ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    content: Optional[str] = typer.Option(None, "--content", "-c", help="New text"),
) -> None:
    """
    Edit a note's title or text and save it.
    """
    try:
        data = NoteUpdate(title=title, content=content)
    except PydanticValidationError as e:
        _fail(e.errors()[0]["msg"])

    result = _run(lambda service: service.edit_note(note_id, data))
    _check(result)
    console.print(f"Saved note {result.data.id}")


@app.command()
def delete(note_ids: list[str] = typer.Argument(..., help="Note IDs")) -> None:
    """
    Delete notes. Unknown IDs are ignored.
    """
    result = _run(lambda service: service.delete_notes(note_ids))
    _check(result)
    console.print(f"Deleted {result.data} note(s)")


@app.command()
def copy(
    note_id: str = typer.Argument(..., help="Note ID"),
    out: Path = typer.Option(Path("clipboard"), "--out", "-o", file_okay=False, help="Directory receiving copied files"),
) -> None:
    """
    Copy a note: every image format that encodes, or the text.
    """

    async def command(service: NoteService) -> Note:
        return await _load(service, note_id)

    note = _run(command)
    sink = DirectoryClipboard(out, stem=note.id)
    quality = get_app_config().notes.export.lossy_quality

    try:
        outcome = copy_note(note, sink, quality=quality)
    except OSError as e:
        _fail(f"Could not write to {out}: {e}")
    if outcome is CopyOutcome.NOTHING_TO_COPY:
        _fail("Nothing to copy")

    for path in sink.written:
        console.print(f"Copied to {path}")


@app.command()
def share(
    note_id: str = typer.Argument(..., help="Note ID"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", dir_okay=False, help="File receiving the shared content"),
) -> None:
    """
    Share a note: the image itself, or the title and text.
    """

    async def command(service: NoteService) -> Note:
        return await _load(service, note_id)

    note = _run(command)
    target = ConsoleShareTarget(console, output=out)

    try:
        shared = share_note(note, target)
    except ValueError as e:
        _fail(str(e))
    except OSError as e:
        _fail(f"Could not write to {out}: {e}")

    if not shared:
        _fail("Nothing to share")
    if target.saved is not None:
        console.print(f"Shared to {target.saved}")
