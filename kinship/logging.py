"""
Structured logging for the kinship registry.

Services log key/value events through get_logger(). Entry points call
configure_logging() once; until then structlog's defaults apply. Output goes
to stderr because the MCP stdio transport owns stdout.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(level: str = "INFO", json_output: bool = True) -> None:
    """
    Configure structlog for the process.

    Args:
        level: Minimum level name, e.g. "INFO"
        json_output: Render JSON lines instead of the console format
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def configure_from_settings() -> None:
    """Apply the LOG_* settings."""
    from kinship.config import settings
    configure_logging(settings.logging.level, settings.logging.json_output)


def get_logger(name: str = "kinship"):
    """Return a bound logger tagged with the module name."""
    return structlog.get_logger(name)
