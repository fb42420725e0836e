"""
catalog-cleaner - structlog configuration.

Log lines go to stderr: stdout is reserved for the per-file action report
so that an operator can pipe or archive it.

Usage:
    from cleaner.config.logging import configure_logging

    # At CLI startup
    configure_logging(level="DEBUG", json_format=False)

    # In modules
    import structlog
    logger = structlog.get_logger(__name__)
    logger.info("event_name", key=value)
"""

import logging
import os
import sys

import structlog
from structlog.types import EventDict, WrappedLogger


def add_app_context(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Tag every event with the application name."""
    event_dict["app"] = "catalog-cleaner"
    return event_dict


def configure_logging(
    level: str | None = None,
    json_format: bool | None = None,
    enable_colors: bool = False,
) -> None:
    """
    Configure structlog for catalog-cleaner.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to the
            LOG_LEVEL env var, then WARNING.
        json_format: JSON output if True, human readable otherwise. Defaults
            to LOG_FORMAT=json.
        enable_colors: Colorize console output (interactive use only)

    Example:
        >>> configure_logging(level="DEBUG", json_format=False, enable_colors=True)
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "WARNING")
    if json_format is None:
        json_format = os.getenv("LOG_FORMAT", "console") == "json"

    log_level = getattr(logging, level.upper(), logging.WARNING)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=enable_colors))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
