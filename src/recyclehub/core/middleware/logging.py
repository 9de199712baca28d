"""Access logging for the status and slug APIs.

One record when a request arrives and one when it finishes. The finishing
record names the matched route template (``/api/v1/statuses/{kind}``), so
lookups of different status names aggregate under one route, and its
level follows the outcome: 5xx is an error, 4xx a warning.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Final

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from recyclehub.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = get_logger(__name__)

DEFAULT_EXCLUDED_PATHS: Final[frozenset[str]] = frozenset(
    {"/api/v1/health", "/api/v1/ready", "/favicon.ico"}
)


def client_ip(request: Request) -> str:
    """First ``X-Forwarded-For`` hop, then ``X-Real-IP``, then the peer."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip

    return request.client.host if request.client else "unknown"


def _completion_level(status_code: int) -> str:
    if status_code >= 500:
        return "ERROR"
    if status_code >= 400:
        return "WARNING"
    return "INFO"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log each request outside ``exclude_paths`` with its outcome and timing."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        exclude_paths: frozenset[str] | set[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.exclude_paths = frozenset(
            DEFAULT_EXCLUDED_PATHS if exclude_paths is None else exclude_paths
        )

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        bind_context(
            method=request.method,
            path=request.url.path,
            client_ip=client_ip(request),
        )
        logger.info("Request received", query=str(request.query_params) or None)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        route = request.scope.get("route")
        logger.log(
            _completion_level(response.status_code),
            "Request finished",
            route=getattr(route, "path", None),
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        return response
