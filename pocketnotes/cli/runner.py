"""
Store lifecycle for one CLI command.

Each command opens the configured note store, runs, and closes it.
Application errors become a red message and exit code 1.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import typer
from rich.console import Console

from pocketnotes.backend.core.exceptions import ApplicationError
from pocketnotes.backend.services.note import NoteService
from pocketnotes.backend.services.store import open_note_store

T = TypeVar("T")

console = Console()


async def _with_service(action: Callable[[NoteService], Awaitable[T]]) -> T:
    store = await open_note_store()
    try:
        return await action(NoteService(store))
    finally:
        await store.close()


def run_with_service(action: Callable[[NoteService], Awaitable[T]]) -> T:
    """Run an async action against a freshly opened store."""
    try:
        return asyncio.run(_with_service(action))
    except ApplicationError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1) from e
