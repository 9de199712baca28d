"""Loguru setup for the RecycleHub service.

Every record carries the request context bound by the HTTP middleware
(``request_id``, ``method``, ``path``, ``client_ip``) under ``extra``.
Production writes one JSON object per line; development writes colored
text. Records from libraries that log through the standard ``logging``
module (uvicorn, asyncpg) are bridged into loguru.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any, Final

import orjson
from loguru import logger

from recyclehub.core.config.settings import LoggingSettings


if TYPE_CHECKING:
    from loguru import Logger, Record


_request_context: ContextVar[dict[str, Any]] = ContextVar(
    "request_context", default={}
)

_THIRD_PARTY_LOGGERS: Final[tuple[str, ...]] = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "asyncpg",
    "watchfiles",
)


class InterceptHandler(logging.Handler):
    """Bridge from standard ``logging`` records into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Report the frame that called logging, not the logging module itself
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _escape(text: str) -> str:
    # Formatter output is a loguru template: braces are fields, <...> is markup
    return text.replace("{", "{{").replace("}", "}}").replace("<", r"\<")


def _merge_context(record: Record) -> None:
    """Copy the request context into ``extra``; explicit kwargs win."""
    for key, value in _request_context.get().items():
        record["extra"].setdefault(key, value)


def _json_line(record: Record) -> str:
    extra = dict(record["extra"])
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "logger": extra.pop("name", record["name"]),
        "message": record["message"],
        "function": record["function"],
        "line": record["line"],
        **extra,
    }

    exception = record["exception"]
    if exception:
        payload["exception"] = {
            "type": exception.type.__name__ if exception.type else None,
            "value": str(exception.value) if exception.value else None,
        }

    return _escape(orjson.dumps(payload, default=str).decode()) + "\n"


def _text_line(record: Record) -> str:
    extra = dict(record["extra"])
    name = _escape(str(extra.pop("name", record["name"])))
    context = " ".join(f"{key}={value}" for key, value in extra.items())
    suffix = f" | {_escape(context)}" if context else ""

    template = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        f"<cyan>{name}</cyan>:<cyan>{{function}}</cyan>:<cyan>{{line}}</cyan>"
        f"{suffix} - <level>{{message}}</level>\n"
    )
    if record["exception"]:
        template += "{exception}\n"
    return template


def setup_logging(
    config: LoggingSettings | None = None,
    *,
    is_development: bool = False,
) -> None:
    """Replace loguru's default sink with the configured ones.

    Args:
        config: The ``logging`` settings section. Defaults apply when omitted.
        is_development: Forces colored text output regardless of ``format``.
    """
    config = config or LoggingSettings()

    logger.remove()
    logger.configure(patcher=_merge_context)

    if config.format == "json" and not is_development:
        logger.add(
            sys.stdout,
            format=_json_line,
            level=config.level,
            colorize=False,
            backtrace=True,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stdout,
            format=_text_line,
            level=config.level,
            colorize=True,
            backtrace=True,
            diagnose=is_development,
        )

    if config.file:
        config.file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            config.file,
            format=_json_line,
            level=config.level,
            rotation=config.rotation,
            retention=config.retention,
            compression="gz",
            backtrace=True,
            diagnose=False,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    floor = logger.level(config.third_party_level).no
    for name in _THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(floor)


def get_logger(name: str) -> Logger:
    """Return the shared logger with ``name`` bound, usually ``__name__``."""
    return logger.bind(name=name)


def bind_context(**values: Any) -> None:
    """Add values to the context attached to every record of this request."""
    _request_context.set({**_request_context.get(), **values})


def clear_context() -> None:
    """Start a fresh context, called at the beginning of each request."""
    _request_context.set({})


__all__ = [
    "bind_context",
    "clear_context",
    "get_logger",
    "logger",
    "setup_logging",
]
