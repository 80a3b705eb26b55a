"""Structured logging configuration with structlog.

Production emits one JSON object per line; every other environment gets the
colored console renderer. The level comes from ``LOG_LEVEL``.

Usage:
    from tasksync.logging_setup import configure_logging

    configure_logging("production")

    log = structlog.get_logger()
    log.info("tasks_listed", owner_id="...", count=3)
"""

import logging
from typing import Optional, TextIO

import structlog
from structlog.typing import Processor

from .config import ENVIRONMENT, LOG_LEVEL


def _get_log_level(level_name: str) -> int:
    return getattr(logging, level_name.upper(), logging.INFO)


def configure_logging(
    environment: str = ENVIRONMENT,
    level: str = LOG_LEVEL,
    stream: Optional[TextIO] = None,
) -> None:
    """Configure structlog for the process.

    Args:
        environment: 'production' for JSON output, anything else for console.
        level: Minimum level name, e.g. 'DEBUG' or 'WARNING'.
        stream: Where log lines go; stdout when omitted. Command line tools
            that print results pass ``sys.stderr``.
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if environment == "production":
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors + [final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )
