"""Structured logging setup shared by every context."""

import logging
import sys

import structlog

from shared.config import settings


def configure_logging(json_output: bool | None = None, log_level: str | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Defaults come from ``LOG_FORMAT`` and ``LOG_LEVEL`` in settings.
    """
    if json_output is None:
        json_output = settings.LOG_FORMAT.lower() == "json"
    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    return structlog.get_logger(name)
