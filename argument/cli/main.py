"""
CLI Client.

Command-line client for Argument notes.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    argument --help
    argument notes add "Titre" -c "Contenu"
    argument notes list -s argument
    argument notes copy <id> -o clipboard/

Options:
    --verbose, -v     Enable verbose output
    --debug           Enable debug mode (detailed logging)
    --help            Show help message
"""

import typer
from rich.console import Console

from argument.cli.commands import notes_app
from argument.core.config import validate_project_root
from argument.core.logging import setup_logging

app = typer.Typer(
    name="argument",
    help="Argument CLI - Capture, search, copy and share short notes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.add_typer(notes_app, name="notes")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Argument CLI.

    Capture, search, copy and share short text or image notes.
    """
    validate_project_root()

    if debug:
        setup_logging(level="DEBUG", format_type="console", enable_console=True)
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console", enable_console=True)
    else:
        setup_logging()


if __name__ == "__main__":
    app()
