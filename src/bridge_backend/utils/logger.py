"""
Module: logger.py
Description: Structured logging configuration for the bridge backend.

Configures structlog for JSON output shared by the HTTP service and
the maintenance scripts. Provides consistent logging across all
modules with proper context and structured data.

Key Components:
- JSON output with timestamp and level fields
- configure_logging() to apply the configured minimum level
- get_logger() helper function

Dependencies: structlog, logging, datetime
Author: Bridge Backend Team
"""

import logging
from datetime import datetime, timezone

import structlog


def _add_timestamp(logger, method_name, event_dict):
    """
    Add ISO 8601 timestamp to log entries.

    Args:
        logger: Logger instance
        method_name: Log method name (info, error, etc.)
        event_dict: Current log event dictionary

    Returns:
        Updated event dictionary with timestamp
    """
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _add_log_level(logger, method_name, event_dict):
    """Add log level to event dictionary."""
    event_dict["level"] = method_name.upper()
    return event_dict


def configure_logging(level: str = "INFO") -> None:
    """
    Configure structlog processors and the minimum log level.

    Safe to call more than once; the last call wins. Entry points call
    this with the configured LOG_LEVEL before doing any work.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    structlog.configure(
        processors=[
            _add_timestamp,
            _add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.WriteLoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        cache_logger_on_first_use=False,
    )


configure_logging()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("DB reset complete", dropped=11)
        {"dropped": 11, "event": "DB reset complete", "timestamp": "2024-01-15T10:30:00+00:00", "level": "INFO"}
    """
    return structlog.get_logger(name)
