"""
pocketnotes.

- backend/: Note store, media storage, services, HTTP API, configuration
- cli/: Local command-line client (Typer + Rich)
"""

__version__ = "1.0.0"
