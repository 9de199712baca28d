"""Request correlation IDs.

A caller-supplied ``X-Request-ID`` is reused when it looks like an
identifier; anything else (empty, too long, containing spaces, quotes or
control characters) is replaced by a fresh UUID so that log lines and
error envelopes never echo arbitrary header content.
"""

from __future__ import annotations

import re
import uuid
from typing import TYPE_CHECKING, Final

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from recyclehub.observability.logging import bind_context, clear_context


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp


REQUEST_ID_HEADER: Final[str] = "X-Request-ID"

_ACCEPTED_ID_RE: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9._-]{1,128}")


def resolve_request_id(candidate: str | None) -> str:
    """Return ``candidate`` if it is a usable ID, otherwise a new UUID4."""
    if candidate and _ACCEPTED_ID_RE.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a correlation ID to the request, its logs and its response."""

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER) -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        # Context is per request; nothing from a previous request may leak in
        clear_context()

        request_id = resolve_request_id(request.headers.get(self.header_name))
        request.state.request_id = request_id
        bind_context(request_id=request_id)

        response = await call_next(request)
        response.headers[self.header_name] = request_id
        return response
