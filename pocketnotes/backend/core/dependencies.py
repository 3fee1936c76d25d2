"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

import uuid
from typing import Annotated

from fastapi import Depends, Header, Request

from pocketnotes.backend.core.exceptions import DatabaseError
from pocketnotes.backend.services.note import NoteService
from pocketnotes.backend.services.store import NoteStore


def get_note_store(request: Request) -> NoteStore:
    """
    The note store opened by the application lifespan.

    Raises:
        DatabaseError: If the application started without a store
    """
    store = getattr(request.app.state, "note_store", None)
    if store is None:
        raise DatabaseError("Note store is not available")
    return store


Store = Annotated[NoteStore, Depends(get_note_store)]


def get_note_service(store: Store) -> NoteService:
    """A note service bound to the shared store."""
    return NoteService(store)


NoteServiceDep = Annotated[NoteService, Depends(get_note_service)]


async def get_request_id(x_request_id: str | None = Header(None)) -> str:
    """Extract or generate request ID from headers."""
    return x_request_id or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]
