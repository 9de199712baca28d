"""Custom middleware components."""

from recyclehub.core.middleware.logging import LoggingMiddleware
from recyclehub.core.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware


__all__ = [
    "REQUEST_ID_HEADER",
    "LoggingMiddleware",
    "RequestIDMiddleware",
]
