"""
Notes API Endpoints.

REST API endpoints for note management.
"""

from fastapi import APIRouter, Query
from fastapi.responses import FileResponse

from pocketnotes.backend.core.dependencies import NoteServiceDep, RequestId
from pocketnotes.backend.core.exceptions import NotFoundError
from pocketnotes.backend.schemas.base import ApiResponse, ResponseMetadata
from pocketnotes.backend.schemas.note import NoteCreate, NoteRecord, NoteUpdate

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[NoteRecord],
    status_code=201,
    summary="Create a note",
    description="Create a note with a title, content and an optional attachment.",
)
async def create_note(
    data: NoteCreate,
    service: NoteServiceDep,
    request_id: RequestId,
) -> ApiResponse[NoteRecord]:
    note = await service.create_note(data)
    return ApiResponse(data=note, metadata=ResponseMetadata(request_id=request_id))


@router.get(
    "",
    response_model=ApiResponse[list[NoteRecord]],
    summary="List notes",
    description="All notes, most recently updated first.",
)
async def list_notes(
    service: NoteServiceDep,
    request_id: RequestId,
) -> ApiResponse[list[NoteRecord]]:
    notes = await service.list_notes()
    return ApiResponse(data=notes, metadata=ResponseMetadata(request_id=request_id))


@router.get(
    "/search",
    response_model=ApiResponse[list[NoteRecord]],
    summary="Search notes",
    description="Substring search over title and content. A blank query returns nothing.",
)
async def search_notes(
    service: NoteServiceDep,
    request_id: RequestId,
    q: str = Query(
        default="",
        max_length=200,
        description="Search query",
    ),
) -> ApiResponse[list[NoteRecord]]:
    notes = await service.search_notes(q)
    return ApiResponse(data=notes, metadata=ResponseMetadata(request_id=request_id))


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteRecord],
    summary="Get a note",
)
async def get_note(
    note_id: int,
    service: NoteServiceDep,
    request_id: RequestId,
) -> ApiResponse[NoteRecord]:
    note = await service.get_note(note_id)
    return ApiResponse(data=note, metadata=ResponseMetadata(request_id=request_id))


@router.get(
    "/{note_id}/media",
    response_class=FileResponse,
    summary="Download a note's attachment",
)
async def get_note_media(
    note_id: int,
    service: NoteServiceDep,
) -> FileResponse:
    note = await service.get_note(note_id)
    if not note.media_path:
        raise NotFoundError("Note has no attachment")
    path = await service.store.media.resolve(note.media_path)
    return FileResponse(path, filename=path.name)


@router.patch(
    "/{note_id}",
    response_model=ApiResponse[NoteRecord],
    summary="Update a note",
    description="Only provided fields are updated. A replaced attachment file is kept on disk.",
)
async def update_note(
    note_id: int,
    data: NoteUpdate,
    service: NoteServiceDep,
    request_id: RequestId,
) -> ApiResponse[NoteRecord]:
    note = await service.update_note(note_id, data)
    return ApiResponse(data=note, metadata=ResponseMetadata(request_id=request_id))


@router.delete(
    "/{note_id}",
    status_code=204,
    summary="Delete a note",
    description="Delete the note and, best effort, its attachment file.",
)
async def delete_note(
    note_id: int,
    service: NoteServiceDep,
) -> None:
    await service.delete_note(note_id)
