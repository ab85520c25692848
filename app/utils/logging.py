"""structlog setup shared by the resolver, the accessor and the CLI.

Output goes to stderr so that ``scripts/media.py`` can print JSON on stdout.
The threshold comes from ``MEDIA_LOG_LEVEL`` (default ``WARNING``).
"""

import logging
import os
import sys
from typing import TextIO

import structlog

_DEFAULT_LEVEL = "WARNING"


def configure_logging(level: str | None = None, stream: TextIO | None = None) -> None:
    """Configure structlog once for the process.

    Args:
        level: Level name (``DEBUG``, ``INFO`` ...).  Defaults to the
            ``MEDIA_LOG_LEVEL`` env var, then ``WARNING``.  Unknown names
            fall back to ``WARNING``.
        stream: File-like object to render to.  Defaults to ``sys.stderr``.
    """
    name = (level or os.environ.get("MEDIA_LOG_LEVEL") or _DEFAULT_LEVEL).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        numeric = logging.WARNING

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str):
    """Return a structlog logger bound to *name*, configuring on first use."""
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)
