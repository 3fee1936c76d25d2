"""
Media Storage.

Filesystem side of note attachments: copies picked files into the
app-managed media directory, classifies them, and removes them again.

Blocking filesystem calls run in a worker thread so callers on the event
loop are suspended, not blocked.
"""

import asyncio
import mimetypes
import shutil
import time
from pathlib import Path

from pocketnotes.backend.core.exceptions import MediaError, NotFoundError
from pocketnotes.backend.core.logging import get_logger
from pocketnotes.backend.models.note import MediaType
from pocketnotes.backend.schemas.note import MediaAttachment

logger = get_logger(__name__)


def classify(path: str | Path) -> MediaType:
    """Image for image/* MIME types, document for everything else."""
    mime, _ = mimetypes.guess_type(str(path))
    if mime is not None and mime.startswith("image/"):
        return MediaType.IMAGE
    return MediaType.DOCUMENT


class MediaStorage:
    """
    Attachment files under a single directory.

    Stored names follow the mobile app: images become <epoch-millis><suffix>,
    documents keep their name behind a <epoch-millis>_ prefix.
    """

    def __init__(self, directory: str | Path, default_image_suffix: str = ".jpg") -> None:
        self.directory = Path(directory).expanduser()
        self.default_image_suffix = default_image_suffix

    async def ensure_directory(self) -> Path:
        """
        Create the media directory if it does not exist.

        Raises:
            MediaError: If the directory cannot be created
        """
        try:
            await asyncio.to_thread(self.directory.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            logger.error(
                "Media directory creation failed",
                extra={"directory": str(self.directory), "error": str(e)},
            )
            raise MediaError(f"Cannot create media directory {self.directory}") from e
        return self.directory

    def _target_name(self, source: Path, media_type: MediaType, millis: int) -> str:
        if media_type == MediaType.IMAGE:
            suffix = source.suffix.lower() or self.default_image_suffix
            return f"{millis}{suffix}"
        return f"{millis}_{source.name}"

    def _next_target(self, source: Path, media_type: MediaType) -> Path:
        millis = time.time_ns() // 1_000_000
        target = self.directory / self._target_name(source, media_type, millis)
        while target.exists():
            millis += 1
            target = self.directory / self._target_name(source, media_type, millis)
        return target

    async def import_file(
        self,
        source: str | Path,
        media_type: MediaType | None = None,
        filename: str | None = None,
    ) -> MediaAttachment:
        """
        Copy a file into media storage.

        Args:
            source: File to copy
            media_type: Attachment kind; classified from the file name if omitted
            filename: Name to classify and store under, when the source is a
                temporary file (uploads)

        Returns:
            The stored copy's path and type

        Raises:
            MediaError: If the source is missing or the copy fails
        """
        source_path = Path(source).expanduser()
        if not source_path.is_file():
            raise MediaError(f"File not found: {source_path}")

        named = Path(filename) if filename else source_path
        kind = media_type or classify(named)

        await self.ensure_directory()
        target = self._next_target(named, kind)

        logger.debug(
            "Copying media file",
            extra={"source": str(source_path), "target": str(target)},
        )
        try:
            await asyncio.to_thread(shutil.copyfile, source_path, target)
        except OSError as e:
            logger.error(
                "Media copy failed",
                extra={"source": str(source_path), "error": str(e)},
            )
            raise MediaError(f"Failed to save {named.name}") from e

        logger.info(
            "Media file stored",
            extra={"path": str(target), "media_type": kind.value},
        )
        return MediaAttachment(path=str(target), media_type=kind)

    def contains(self, path: str | Path) -> bool:
        """Whether path points inside the media directory, after resolving symlinks and '..'."""
        candidate = Path(path).expanduser().resolve()
        return candidate.is_relative_to(self.directory.resolve())

    async def delete(self, path: str | Path) -> None:
        """
        Remove an attachment file.

        Only files inside the media directory are ever removed.

        Raises:
            MediaError: If the path is outside the media directory or the
                file cannot be removed (including when missing)
        """
        if not self.contains(path):
            logger.warning("Refusing to delete file outside media directory", extra={"path": str(path)})
            raise MediaError(f"Not a stored attachment: {path}")
        try:
            await asyncio.to_thread(Path(path).unlink)
        except OSError as e:
            raise MediaError(f"Failed to delete media file {path}") from e
        logger.debug("Media file deleted", extra={"path": str(path)})

    async def resolve(self, path: str | Path) -> Path:
        """
        Return the attachment's path after checking it still exists.

        Raises:
            NotFoundError: If the file is gone or is not inside the media
                directory
        """
        candidate = Path(path)
        if not self.contains(candidate):
            logger.warning("Refusing to serve file outside media directory", extra={"path": str(path)})
            raise NotFoundError("Media file not found")
        exists = await asyncio.to_thread(candidate.is_file)
        if not exists:
            raise NotFoundError("Media file not found")
        return candidate
