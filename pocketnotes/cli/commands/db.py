"""
Database Commands.

The notes table is created once and never migrated; these commands
create it ahead of time and report where data lives.
"""

import typer
from rich.console import Console
from rich.table import Table

from pocketnotes.backend.core.config import get_database_url, get_media_dir
from pocketnotes.backend.services.note import NoteService
from pocketnotes.cli.runner import run_with_service

app = typer.Typer(help="Database commands")
console = Console()


@app.command()
def init() -> None:
    """
    Create the notes table if it does not exist.

    Examples:
        cli.py db init
    """
    async def _noop(service: NoteService) -> None:
        return None

    run_with_service(_noop)
    console.print("[green]Database initialized[/green]")


@app.command()
def info() -> None:
    """
    Show database location, media directory and note count.

    Examples:
        cli.py db info
    """
    async def _count(service: NoteService) -> int:
        return len(await service.list_notes())

    count = run_with_service(_count)

    table = Table(title="Storage", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Database", get_database_url())
    table.add_row("Media directory", str(get_media_dir()))
    table.add_row("Notes", str(count))
    console.print(table)
