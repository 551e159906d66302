# src/fetchcell/core/logging.py
"""Structured logging for fetchcell.

Every module logs through structlog (``structlog.get_logger(__name__)``).
Events are handed to stdlib logging and rendered by a single
ProcessorFormatter on the root handler, so records from third-party
libraries using plain ``logging`` come out in the same format.

Event names are snake_case verbs (``fetch_cell_started``,
``resource_retrieved``); context goes in keyword fields, never in the
event string.
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

# Connection-level chatter from the HTTP stack.
_HTTP_LOGGERS: tuple[str, ...] = (
    "httpx",
    "httpcore",
    "httpcore.connection",
    "httpcore.http11",
)

_PRE_CHAIN: list[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
]


def _drop_formatter_keys(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Remove the bookkeeping keys ProcessorFormatter adds to every event."""
    event_dict.pop("_record")
    event_dict.pop("_from_structlog")
    return event_dict


def _render_chain(json_output: bool) -> list[Any]:
    if json_output:
        return [_drop_formatter_keys, structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [_drop_formatter_keys, structlog.dev.ConsoleRenderer(colors=True)]


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib logging to one handler.

    Safe to call repeatedly; each call replaces the root handler.

    Args:
        json_output: One JSON object per line instead of console rendering
        level: Root level name (DEBUG, INFO, WARNING, ERROR)
        stream: Destination, sys.stdout when omitted
    """
    root_level = logging.getLevelNamesMapping()[level.upper()]

    structlog.configure(
        processors=[*_PRE_CHAIN, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration must reach loggers created before this call.
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(ProcessorFormatter(processors=_render_chain(json_output), foreign_pre_chain=_PRE_CHAIN))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(root_level)

    # --verbose debugs fetchcell, not the connection pool.
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(max(root_level, logging.WARNING))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to ``name`` (usually ``__name__``)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
