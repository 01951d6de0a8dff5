"""structlog configuration for applications embedding the client.

The library itself only calls ``structlog.get_logger()``; applications call
``configure_logging`` once at startup to choose the rendering.
"""

from __future__ import annotations

import logging
from typing import TextIO

import structlog


def configure_logging(
    production: bool = False,
    level: str | int | None = None,
    stream: TextIO | None = None,
) -> None:
    """Install the structlog pipeline used by the CLI and embedding apps.

    ``production`` selects one JSON object per line at INFO; otherwise lines
    go through the coloured console renderer at DEBUG.

    Args:
        production: Render JSON instead of console output.
        level: Explicit log level name or number, overriding the mode default.
        stream: File to write log lines to; stdout when omitted.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if production:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        log_level = logging.INFO
    else:
        renderer = structlog.dev.ConsoleRenderer()
        log_level = logging.DEBUG

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        log_level = resolved if isinstance(resolved, int) else logging.INFO
    elif isinstance(level, int):
        log_level = level

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.bind_contextvars(service="contextio-client")
