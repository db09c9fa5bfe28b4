"""Structured logging setup."""

import logging

import structlog

from queuekit.config import settings


def setup_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    """Configure structlog output.

    Args:
        log_level: Level name, defaults to ``settings.monitoring.log_level``
        log_format: ``"json"`` or ``"text"``, defaults to ``settings.monitoring.log_format``
    """
    level_name = (log_level or settings.monitoring.log_level).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    fmt = log_format or settings.monitoring.log_format

    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
