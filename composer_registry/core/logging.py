# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Structured logging for the composer registry.

Provides JSON-formatted logging for easy parsing and analysis.
All module loggers live under the "composer_registry" namespace and
propagate to the handler installed by setup_logging().
"""

import logging
import json
import sys
from datetime import datetime, UTC
from typing import Optional, Any

ROOT_LOGGER_NAME = "composer_registry"

_RESERVED_ATTRS = frozenset([
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName",
    "relativeCreated", "thread", "threadName", "exc_info",
    "exc_text", "stack_info", "taskName",
])


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON for easy parsing by log aggregation systems.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_data = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add extra fields
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Simple text formatter for human-readable logs."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )


def get_logger(
    name: str,
    log_level: Optional[str] = None,
    log_format: str = "json"
) -> logging.Logger:
    """
    Get logger instance, optionally attaching handlers to it.

    Without a log_level the logger is returned untouched and relies on
    propagation to the package logger.

    Args:
        name: Logger name (usually __name__)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format type (json or text)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    if log_level is None:
        return logger

    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    # Choose formatter
    if log_format == "json":
        formatter = JSONFormatter()
    else:
        formatter = TextFormatter()

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def setup_logging(log_level: str = "INFO", log_format: str = "json") -> logging.Logger:
    """Configure the package logger once at startup."""
    logger = get_logger(ROOT_LOGGER_NAME, log_level=log_level, log_format=log_format)
    logger.propagate = False
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    level: str = "INFO",
    **kwargs: Any
) -> None:
    """
    Log structured event with additional fields.

    Args:
        logger: Logger instance
        event: Event name
        level: Log level
        **kwargs: Additional fields to include in log
    """
    log_func = getattr(logger, level.lower())
    log_func(event, extra=kwargs)


# Pre-configured loggers
def get_api_logger() -> logging.Logger:
    """Get logger for API routes."""
    return get_logger(f"{ROOT_LOGGER_NAME}.api")


def get_service_logger(service_name: str) -> logging.Logger:
    """Get logger for service layer."""
    return get_logger(f"{ROOT_LOGGER_NAME}.service.{service_name}")
