"""
Request Context Middleware.

Gives every HTTP request an id, a frontend label and a timing, and makes
them part of every log record emitted while the request is handled.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from pocketnotes.backend.core.logging import get_logger

logger = get_logger(__name__)

KNOWN_FRONTENDS = {"web", "cli", "mobile", "api", "internal"}


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def _frontend(request: Request) -> str:
    """X-Frontend-ID, lowercased; anything unrecognized is "unknown"."""
    frontend = request.headers.get("X-Frontend-ID", "unknown").lower()
    return frontend if frontend in KNOWN_FRONTENDS else "unknown"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Request id, frontend and timing for every request.

    - X-Request-ID: propagated, or generated when absent
    - X-Frontend-ID: client identifier (mobile, web, cli, ...)
    - X-Response-Time: added to the response, in milliseconds

    request_id and frontend are also stored on request.state.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        frontend = _frontend(request)
        started = time.perf_counter()

        request.state.request_id = request_id
        request.state.frontend = frontend

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            frontend=frontend,
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed with exception",
                extra={"duration_ms": _elapsed_ms(started), "error_type": type(exc).__name__},
            )
            raise
        else:
            duration_ms = _elapsed_ms(started)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"
            logger.debug(
                "Request completed",
                extra={"status_code": response.status_code, "duration_ms": duration_ms},
            )
            return response
        finally:
            structlog.contextvars.clear_contextvars()
