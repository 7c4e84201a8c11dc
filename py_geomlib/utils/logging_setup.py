"""
structlog configuration for scripts and host applications.

Library modules only call `structlog.get_logger()`; nothing is configured on
import. Call `configure_logging()` once from the entry point.
"""

import logging
import sys
from typing import Optional

import structlog

from ..config import settings


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """
    Configure structlog on top of the standard library logger.

    Args:
        level: Log level name (defaults to settings.log_level)
        fmt: "json" or "console" (defaults to settings.log_format)
    """
    level = (level or settings.log_level).upper()
    fmt = fmt or settings.log_format

    # basicConfig is a no-op when the host already installed handlers
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    logging.getLogger().setLevel(level)

    if fmt == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
