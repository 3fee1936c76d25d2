"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from pocketnotes.backend.api.v1.endpoints import media, notes

router = APIRouter()

router.include_router(notes.router, prefix="/notes", tags=["notes"])
router.include_router(media.router, prefix="/media", tags=["media"])
