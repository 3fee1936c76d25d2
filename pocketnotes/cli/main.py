"""
pocketnotes CLI.

Usage:
    python cli.py --help

    # Notes
    python cli.py notes list
    python cli.py notes new "Groceries" --content "milk, eggs"
    python cli.py notes new "Receipt" --image receipt.png
    python cli.py notes search milk
    python cli.py notes show 1
    python cli.py notes edit 1 --title "Groceries (Sat)"
    python cli.py notes delete 1 --yes

    # Storage
    python cli.py db init
    python cli.py db info

    # HTTP API
    python cli.py server start --reload

Options:
    --verbose, -v     Enable verbose output
    --debug, -d       Enable debug mode (detailed logging)
"""

import structlog
import typer
from rich.console import Console

from pocketnotes.backend.core.config import validate_project_root
from pocketnotes.cli.commands import db_app, notes_app, server_app

app = typer.Typer(
    name="pocketnotes",
    help="pocketnotes CLI - notes, storage and the HTTP server.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.add_typer(notes_app, name="notes")
app.add_typer(db_app, name="db")
app.add_typer(server_app, name="server")


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
    pocketnotes CLI.

    Works directly on the local notes database; no server required.
    """
    validate_project_root()

    from pocketnotes.backend.core.logging import setup_logging

    if debug:
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging(level="WARNING", format_type="console")

    structlog.contextvars.bind_contextvars(source="cli")
