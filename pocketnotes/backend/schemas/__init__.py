# Pydantic schemas package
from pocketnotes.backend.schemas.base import (
    ApiResponse,
    ErrorDetail,
    ErrorResponse,
    ResponseMetadata,
)
from pocketnotes.backend.schemas.note import (
    MediaAttachment,
    NoteCreate,
    NoteRecord,
    NoteUpdate,
)

__all__ = [
    "ApiResponse",
    "ErrorDetail",
    "ErrorResponse",
    "MediaAttachment",
    "NoteCreate",
    "NoteRecord",
    "NoteUpdate",
    "ResponseMetadata",
]
