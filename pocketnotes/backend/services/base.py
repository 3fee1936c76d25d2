"""
Base Service.

Base class for services: the layer between frontends (API, CLI) and the
note store. Services hold the rules the screens used to enforce.

Usage:
    class NoteService(BaseService):
        def __init__(self, store: NoteStore) -> None:
            super().__init__(store)

        async def create_note(self, data: NoteCreate) -> NoteRecord:
            self._validate_required(data.model_dump(), ["title"])
            return await self.store.create(data.title, data.content)
"""

from typing import Any

from pocketnotes.backend.core.exceptions import ValidationError
from pocketnotes.backend.core.logging import get_logger
from pocketnotes.backend.services.store import NoteStore


class BaseService:
    """
    Base class for all services.

    Provides:
    - Access to the shared note store
    - Logging context
    - Common validation patterns
    """

    def __init__(self, store: NoteStore) -> None:
        self._store = store
        self._logger = get_logger(self.__class__.__module__)

    @property
    def store(self) -> NoteStore:
        """The note store this service works against."""
        return self._store

    def _validate_required(
        self,
        fields: dict[str, Any],
        field_names: list[str],
    ) -> None:
        """
        Validate that required fields are present and not blank.

        Raises:
            ValidationError: If any required field is missing or blank
        """
        missing = []
        for name in field_names:
            value = fields.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)

        if missing:
            raise ValidationError(
                "Required fields missing",
                details={"missing_fields": missing},
            )

    def _log_operation(self, operation: str, **context: Any) -> None:
        """Log a service operation with context."""
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(self, message: str, **context: Any) -> None:
        """Log debug information."""
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
