from __future__ import annotations

import logging
import sys
from typing import Any

import orjson
import structlog


def _json_serializer(obj: Any, default: Any) -> str:
    return orjson.dumps(obj, default=default).decode("utf-8")


def configure_logging(*, level: str = "INFO", json: bool = True) -> None:
    """
    Configure structured logging for the whole process.

    Call once at startup (create_engine does it). Library code only ever
    asks structlog for a logger; it never configures output itself.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    renderer: Any
    if json:
        renderer = structlog.processors.JSONRenderer(serializer=_json_serializer)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    processors: list[Any] = [
        # session_id, component, ...
        structlog.contextvars.merge_contextvars,

        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),

        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,

        renderer,
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def bind_context(**values: Any) -> None:
    """
    Bind contextual information to all future log entries.

    Example:
        bind_context(session_id="20261019T120000Z_ab12cd34", component="engine")
    """
    structlog.contextvars.bind_contextvars(**values)


def clear_context() -> None:
    """
    Clear all bound logging context (between sessions or at shutdown).
    """
    structlog.contextvars.clear_contextvars()


def unbind_context(*keys: str) -> None:
    """
    Drop specific keys (e.g. session_id on reset) and keep the rest.
    """
    structlog.contextvars.unbind_contextvars(*keys)
