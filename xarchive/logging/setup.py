"""Structlog configuration for xarchive."""

import logging
import sys

import structlog

from xarchive.config import ArchiveConfig, LogFormat


def _stderr_logger(*args) -> structlog.PrintLogger:
    # Resolved per logger so a swapped sys.stderr is picked up
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(config: ArchiveConfig | None = None) -> None:
    """
    Configure structlog with appropriate processors and output format.

    Output goes to stderr; stdout is reserved for the MCP stdio stream.

    Args:
        config: ArchiveConfig instance, uses defaults if None
    """
    if config is None:
        config = ArchiveConfig()

    # Set up standard library logging
    log_level = getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    # Common processors
    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    # Add format-specific processors
    if config.log_format == LogFormat.JSON:
        processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ])
    else:
        processors.extend([
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """
    Get a configured structlog logger.

    Args:
        name: Optional logger name for context

    Returns:
        Lazy structlog logger, resolved against the current configuration
    """
    if name:
        return structlog.get_logger(logger_name=name)
    return structlog.get_logger()
