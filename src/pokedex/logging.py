"""
structlog configuration for the Pokedex service
"""

import logging
import secrets
import sys
from contextvars import ContextVar
from typing import Any, TextIO

import structlog

# Set per HTTP request by LoggingContextMiddleware
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)

REQUEST_ID_BYTES = 9  # 12 urlsafe base64 characters


def add_request_id(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor stamping the current request id onto every event."""
    _ = logger, method_name
    request_id = request_id_ctx.get()
    if request_id is not None:
        event_dict.setdefault("request_id", request_id)
    return event_dict


def configure_logging(debug: bool = False, stream: TextIO | None = None) -> None:
    """Route stdlib logging and structlog to ``stream`` (stderr by default).

    Debug mode renders coloured key=value lines; otherwise every event is
    one JSON object.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        stream=stream if stream is not None else sys.stderr,
        format="%(message)s",
        force=True,
    )

    renderer = (
        structlog.dev.ConsoleRenderer(colors=True)
        if debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_request_id,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


def new_request_id() -> str:
    return secrets.token_urlsafe(REQUEST_ID_BYTES)


def bind_request_id(request_id: str | None = None) -> str:
    """Make ``request_id`` (or a fresh one) current and return it."""
    if request_id is None:
        request_id = new_request_id()
    request_id_ctx.set(request_id)
    return request_id


def clear_request_id() -> None:
    request_id_ctx.set(None)


def get_request_id() -> str | None:
    return request_id_ctx.get()
