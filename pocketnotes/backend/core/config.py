"""
Configuration Management.

Loads settings from config/settings/*.yaml and optional environment
overrides from POCKETNOTES_* variables (or config/.env).

Settings (YAML):
    application.yaml - App identity, server, cors
    database.yaml    - SQLite file location and engine echo
    logging.yaml     - Logging configuration
    media.yaml       - Attachment storage directory

Overrides (environment):
    POCKETNOTES_DATABASE_URL - Full SQLAlchemy URL, replaces database.yaml path
    POCKETNOTES_MEDIA_DIR    - Attachment directory, replaces media.yaml directory
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from pocketnotes.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    LoggingSchema,
    MediaSchema,
)


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def validate_project_root() -> Path:
    """
    Validate that the project root can be found.

    Raises SystemExit with a clear message if .project_root is not found.
    Use this in entry scripts before any configuration loading.
    """
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Environment overrides. Everything here is optional."""

    database_url: str | None = None
    media_dir: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="POCKETNOTES_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._database = _load_validated(DatabaseSchema, "database.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")
        self._media = _load_validated(MediaSchema, "media.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def database(self) -> DatabaseSchema:
        """Database settings."""
        return self._database

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging

    @property
    def media(self) -> MediaSchema:
        """Attachment storage settings."""
        return self._media


@lru_cache
def get_settings() -> Settings:
    """Get cached overrides. Reads config/.env when it exists."""
    env_path = find_project_root() / "config" / ".env"
    if env_path.exists():
        return Settings(_env_file=str(env_path))
    return Settings()


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def _resolve(path: str) -> Path:
    """Resolve a configured path relative to the project root."""
    candidate = Path(path).expanduser()
    if candidate.is_absolute():
        return candidate
    return find_project_root() / candidate


def get_database_url() -> str:
    """
    Construct the SQLAlchemy URL of the notes database.

    Returns:
        POCKETNOTES_DATABASE_URL if set, otherwise an aiosqlite URL for
        the file configured in database.yaml.
    """
    override = get_settings().database_url
    if override:
        return override
    db_path = _resolve(get_app_config().database.path)
    return f"sqlite+aiosqlite:///{db_path}"


def get_media_dir() -> Path:
    """Directory where attachments are copied to."""
    override = get_settings().media_dir
    if override:
        return Path(override).expanduser()
    return _resolve(get_app_config().media.directory)

