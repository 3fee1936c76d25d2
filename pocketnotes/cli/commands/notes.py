"""
Note Commands.

Browse, create, search, edit and delete notes.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pocketnotes.backend.core.utils import parse_timestamp
from pocketnotes.backend.models.note import MediaType
from pocketnotes.backend.schemas.note import NoteCreate, NoteRecord, NoteUpdate
from pocketnotes.backend.services.note import NoteService
from pocketnotes.cli.runner import run_with_service

app = typer.Typer(help="Note commands")
console = Console()

MEDIA_LABELS = {
    MediaType.IMAGE: "[cyan]image[/cyan]",
    MediaType.DOCUMENT: "[magenta]document[/magenta]",
    MediaType.AUDIO: "[yellow]audio[/yellow]",
}


def _when(timestamp: str) -> str:
    return parse_timestamp(timestamp).strftime("%Y-%m-%d %H:%M")


def _print_notes(notes: list[NoteRecord], title: str, empty: str) -> None:
    if not notes:
        console.print(f"[dim]{empty}[/dim]")
        return

    table = Table(title=title, show_header=True)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Media")
    table.add_column("Title", style="bold")
    table.add_column("Updated", style="dim")

    for note in notes:
        table.add_row(
            str(note.id),
            MEDIA_LABELS.get(note.media_type, "-") if note.media_type else "-",
            note.title,
            _when(note.updated_at),
        )

    console.print(table)


def _print_note(note: NoteRecord) -> None:
    lines = [note.content or "[dim](no content)[/dim]", ""]
    if note.media_path:
        media = note.media_type.value if note.media_type else "file"
        lines.append(f"[bold]Attachment:[/bold] {media} {note.media_path}")
    lines.append(f"[dim]Created {_when(note.created_at)}  Updated {_when(note.updated_at)}[/dim]")
    console.print(Panel("\n".join(lines), title=f"#{note.id} {note.title}"))


@app.command("list")
def list_notes() -> None:
    """
    List all notes, most recently updated first.

    Examples:
        cli.py notes list
    """
    notes = run_with_service(lambda service: service.list_notes())
    _print_notes(notes, title="Notes", empty="No notes yet. Create one with: cli.py notes new TITLE")


@app.command()
def new(
    title: str = typer.Argument(..., help="Note title"),
    content: str = typer.Option("", "--content", "-c", help="Note content"),
    image: Optional[Path] = typer.Option(None, "--image", help="Attach an image"),
    document: Optional[Path] = typer.Option(None, "--document", help="Attach a document"),
) -> None:
    """
    Create a note, optionally with an image or document attached.

    Examples:
        cli.py notes new "Groceries" -c "milk, eggs"
        cli.py notes new "Receipt" --image ~/Pictures/receipt.png
        cli.py notes new "Contract" --document ~/Downloads/contract.pdf
    """
    if image is not None and document is not None:
        console.print("[red]Error: attach either an image or a document, not both[/red]")
        raise typer.Exit(1)
    if not title.strip():
        console.print("[red]Error: Title is required[/red]")
        raise typer.Exit(1)

    async def _create(service: NoteService) -> NoteRecord:
        media_path = None
        media_type = None
        if image is not None:
            attachment = await service.attach_media(image, media_type=MediaType.IMAGE)
            media_path, media_type = attachment.path, attachment.media_type
        elif document is not None:
            attachment = await service.attach_media(document, media_type=MediaType.DOCUMENT)
            media_path, media_type = attachment.path, attachment.media_type
        return await service.create_note(
            NoteCreate(
                title=title,
                content=content,
                media_path=media_path,
                media_type=media_type,
            )
        )

    note = run_with_service(_create)
    console.print(f"[green]Created note #{note.id}[/green]")


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to look for in titles and content"),
) -> None:
    """
    Search notes by title or content (case-insensitive).

    Examples:
        cli.py notes search milk
    """
    notes = run_with_service(lambda service: service.search_notes(query))
    _print_notes(notes, title=f"Results for {query!r}", empty="No results found")


@app.command()
def show(
    note_id: int = typer.Argument(..., help="Note ID"),
) -> None:
    """
    Show a single note.

    Examples:
        cli.py notes show 3
    """
    note = run_with_service(lambda service: service.get_note(note_id))
    _print_note(note)


@app.command()
def edit(
    note_id: int = typer.Argument(..., help="Note ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    content: Optional[str] = typer.Option(None, "--content", "-c", help="New content"),
) -> None:
    """
    Change a note's title and/or content.

    Examples:
        cli.py notes edit 3 --title "Groceries (Saturday)"
        cli.py notes edit 3 -c "milk, eggs, bread"
    """
    changes = {}
    if title is not None:
        changes["title"] = title
    if content is not None:
        changes["content"] = content
    if not changes:
        console.print("[yellow]Nothing to change. Pass --title and/or --content.[/yellow]")
        return
    if "title" in changes and not title.strip():
        console.print("[red]Error: Title is required[/red]")
        raise typer.Exit(1)

    data = NoteUpdate(**changes)
    note = run_with_service(lambda service: service.update_note(note_id, data))
    console.print(f"[green]Updated note #{note.id}[/green]")


@app.command()
def delete(
    note_id: int = typer.Argument(..., help="Note ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """
    Delete a note and its attachment.

    Examples:
        cli.py notes delete 3
        cli.py notes delete 3 --yes
    """
    if not yes and not typer.confirm(f"Delete note #{note_id}?"):
        console.print("[dim]Cancelled[/dim]")
        return

    run_with_service(lambda service: service.delete_note(note_id))
    console.print(f"[green]Deleted note #{note_id}[/green]")
