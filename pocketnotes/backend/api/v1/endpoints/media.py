"""
Media API Endpoints.

Upload a file into media storage before creating or updating the note
that references it.
"""

import asyncio
import shutil
import tempfile
from pathlib import Path

from fastapi import APIRouter, File, Form, UploadFile

from pocketnotes.backend.core.dependencies import NoteServiceDep, RequestId
from pocketnotes.backend.models.note import MediaType
from pocketnotes.backend.schemas.base import ApiResponse, ResponseMetadata
from pocketnotes.backend.schemas.note import MediaAttachment

router = APIRouter()


def _spool(upload: UploadFile) -> Path:
    with tempfile.NamedTemporaryFile(delete=False) as tmp:
        shutil.copyfileobj(upload.file, tmp)
    return Path(tmp.name)


@router.post(
    "",
    response_model=ApiResponse[MediaAttachment],
    status_code=201,
    summary="Upload an attachment",
    description="Store an image or document and return the path to put on a note.",
)
async def upload_media(
    service: NoteServiceDep,
    request_id: RequestId,
    file: UploadFile = File(..., description="Image or document"),
    media_type: MediaType | None = Form(default=None, alias="mediaType"),
) -> ApiResponse[MediaAttachment]:
    spooled = await asyncio.to_thread(_spool, file)
    try:
        attachment = await service.attach_media(
            spooled,
            media_type=media_type,
            filename=file.filename or spooled.name,
        )
    finally:
        await asyncio.to_thread(spooled.unlink, missing_ok=True)
    return ApiResponse(data=attachment, metadata=ResponseMetadata(request_id=request_id))
