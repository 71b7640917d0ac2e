"""Structured logging configuration with structlog.

Logs always go to stderr: stdout is reserved for the scan result JSON.
Every record emitted while a scan runs carries the ``scan_id`` and
``strategy`` bound by :func:`scan_context`.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from violeta.config import Settings

# Both log every request line at INFO/DEBUG
_NOISY_LOGGERS = ("httpx", "httpcore")


def _renderers(settings: "Settings") -> list[structlog.types.Processor]:
    if settings.env == "development":
        return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]
    return [
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def setup_logging(settings: "Settings") -> None:
    """Configure structlog and stdlib logging for a CLI run."""
    level = getattr(logging, settings.log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            *_renderers(settings),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=level,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


@contextmanager
def scan_context(strategy: str) -> Iterator[str]:
    """Bind a fresh scan id and the strategy to every log line in the block.

    Yields:
        The scan id, eight hex characters.
    """
    scan_id = uuid4().hex[:8]
    with structlog.contextvars.bound_contextvars(scan_id=scan_id, strategy=strategy):
        yield scan_id


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
