"""
Health Check Endpoints.

- /health: Liveness check (process running)
- /health/ready: Readiness check (note store answers, media directory usable)
"""

from typing import Any

from fastapi import APIRouter, HTTPException

from pocketnotes.backend.core.dependencies import Store
from pocketnotes.backend.core.logging import get_logger
from pocketnotes.backend.core.utils import utc_now
from pocketnotes.backend.services.store import NoteStore

router = APIRouter()
logger = get_logger(__name__)


async def check_database(store: NoteStore) -> dict[str, Any]:
    """Round trip to the notes database, with latency."""
    try:
        start = utc_now()
        await store.ping()
        latency_ms = int((utc_now() - start).total_seconds() * 1000)
        return {"status": "healthy", "latency_ms": latency_ms}
    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}


async def check_media(store: NoteStore) -> dict[str, Any]:
    """The media directory exists or can be created."""
    try:
        directory = await store.media.ensure_directory()
        return {"status": "healthy", "directory": str(directory)}
    except Exception as e:
        logger.warning("Media health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running. No dependency checks.
    """
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check(store: Store) -> dict[str, Any]:
    """
    Readiness check.

    Returns 503 if the database or the media directory is unusable.
    """
    checks = {
        "database": await check_database(store),
        "media": await check_media(store),
    }

    unhealthy_checks = [
        name for name, check in checks.items()
        if check.get("status") == "unhealthy"
    ]

    if unhealthy_checks:
        logger.warning(
            "Readiness check failed",
            extra={"unhealthy": unhealthy_checks, "checks": checks},
        )
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "checks": checks,
                "timestamp": utc_now().isoformat(),
            },
        )

    return {
        "status": "healthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }
