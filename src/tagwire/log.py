"""Logging helpers for tagwire.

Library modules log through structlog bound loggers that wrap stdlib
loggers, so events go wherever the application sends its ``logging``
output. With no logging configured, debug events are dropped.
"""

from __future__ import annotations

import logging.config
from typing import Any

import structlog

_PROCESSORS: list[Any] = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_log_level,
    structlog.processors.KeyValueRenderer(key_order=["event"], drop_missing=True),
]


def get_logger(name: str) -> Any:
    """Return a structlog logger backed by ``logging.getLogger(name)``.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.new(message="Router").debug("preserving unknown field", field_number=5)
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def setup_logging(debug: bool = False) -> None:
    """Send tagwire log events to stderr (used by the command line tool).

    Args:
        debug: Show debug events (encoded sizes, unknown fields seen while decoding)
    """
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "plain": {"format": "%(name)s %(message)s"},
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": "plain",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                "tagwire": {
                    "handlers": ["stderr"],
                    "level": "DEBUG" if debug else "WARN",
                    "propagate": False,
                },
            },
        }
    )
