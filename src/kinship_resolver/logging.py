"""Structlog-based logging for the kinship resolver.

Library modules log through structlog and never print. Log lines go to
stderr so command output on stdout stays machine-readable.
"""
from __future__ import annotations

import sys
from typing import Literal

import logging
import structlog

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def configure_logging(level: LogLevel = "WARNING", *, json_logs: bool = True) -> None:
    """Configure structlog for the process.

    Args:
        level: Minimum level that is emitted
        json_logs: One JSON object per line; False renders for a terminal
    """
    numeric = getattr(logging, level)
    logging.basicConfig(format="%(message)s", level=numeric, stream=sys.stderr)
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = "kinship_resolver"):
    return structlog.get_logger(name, module=name)


configure_logging()
