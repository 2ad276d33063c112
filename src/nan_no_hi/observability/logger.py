"""Structured logging setup.

Library modules log through ``logging.getLogger(__name__)``; the CLI calls
:func:`setup_logging` once and gets structlog loggers from
:func:`get_logger`.  The name of the store being served is bound into the
logging context so every line says which calendar it came from.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

_LIBRARY_LOGGER = "nan_no_hi"


def bind_store(store_name: str | None) -> None:
    """Tag subsequent structlog entries with ``store=<store_name>``."""
    if store_name:
        structlog.contextvars.bind_contextvars(store=store_name)
    else:
        structlog.contextvars.unbind_contextvars("store")


def _renderer(format: str) -> Any:
    if format == "json":
        # Holiday names are Japanese; keep them readable.
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(
    level: str = "INFO",
    format: str = "console",
    store_name: str | None = None,
) -> None:
    """Configure logging for the CLI.

    Args:
        level: Log level for the ``nan_no_hi`` loggers.
        format: "json" for machine output, "console" for humans.
        store_name: Bound into every structlog entry as ``store``.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=False),
            structlog.processors.UnicodeDecoder(),
            _renderer(format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    bind_store(store_name)

    logging.basicConfig(format="%(message)s", stream=sys.stderr)
    logging.getLogger(_LIBRARY_LOGGER).setLevel(log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)
