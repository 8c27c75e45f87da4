"""
Structured Logging

structlog setup for the feed cache: readable console lines while
developing, one JSON object per event elsewhere.
"""

import logging
from typing import Optional

import structlog

from ..config import get_settings


def setup_logging(log_level: Optional[str] = None):
    """
    Configure structlog for cache and store events.

    Args:
        log_level: Override ``settings.log_level`` (DEBUG, INFO, ...)
    """
    settings = get_settings()
    level = getattr(logging, (log_level or settings.log_level).upper())

    # httpx logs every request at INFO through stdlib logging
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))

    if settings.environment == "development":
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = "post_feed") -> structlog.BoundLogger:
    return structlog.get_logger(name)
