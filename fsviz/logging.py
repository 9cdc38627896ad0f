# fsviz/logging.py

"""
Diagnostic channel configuration.

All modules log through ``structlog.get_logger(__name__)`` with %-style
messages. :func:`setup_logging` sends them to standard error as plain
``fsviz: <level>: <message>`` lines, so they never mix with a tree printed
on standard output.
"""


from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog


def _format_line(_logger: Any, _method: str, event_dict: dict[str, Any]) -> str:
    level = event_dict.pop("level", "info")
    event = event_dict.pop("event", "")
    extra = " ".join(f"{key}={value!r}" for key, value in event_dict.items())
    line = f"fsviz: {level}: {event}"
    return f"{line} {extra}" if extra else line


def setup_logging(level: str = "WARNING", *, stream: TextIO | None = None) -> None:
    """
    Configure structlog for command-line use.

    Parameters
    ----------
    level : str, default="WARNING"
        Minimum level name (``DEBUG``, ``INFO``, ``WARNING``, ``ERROR``,
        ``CRITICAL``); case-insensitive.
    stream : TextIO | None, optional
        Destination; standard error when ``None``.
    """

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            _format_line,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )
