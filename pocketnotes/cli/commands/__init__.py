"""
CLI Commands.

Organized by domain/feature area.
"""

from pocketnotes.cli.commands.db import app as db_app
from pocketnotes.cli.commands.notes import app as notes_app
from pocketnotes.cli.commands.server import app as server_app

__all__ = [
    "db_app",
    "notes_app",
    "server_app",
]
