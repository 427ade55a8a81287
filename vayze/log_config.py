"""
Vayze — Structured logging configuration.

The engine modules only ever call ``structlog.get_logger``; nothing is
configured at import time.  Hosts (and the ``vayze`` CLI) call
``configure_logging`` once at start-up.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(level: str = "INFO", json: bool = True) -> None:
    """Configure structlog with the project-wide processor chain.

    Parameters
    ----------
    level:
        Minimum level name (``"DEBUG"``, ``"INFO"``, ...).  Events below it
        are dropped by the filtering bound logger.
    json:
        Render events as JSON lines when True, otherwise use the
        human-friendly console renderer.
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
