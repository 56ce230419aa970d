"""Structured logging framework using structlog.

This module provides centralized logging configuration with:
- ISO-8601 timestamps
- JSON rendering for structured logs
- Automatic sanitization of credentials (connection strings carry passwords)
- Context binding support

The level is taken from the LOG_LEVEL setting (sql_mapper.config). Default: INFO

Usage:
    >>> from sql_mapper.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("schema.extracted", table="user", column_count=4)
"""

import logging
import os
import re
from typing import Any, Dict, MutableMapping

import structlog
from structlog.types import EventDict, Processor

from sql_mapper.config import get_settings

# Sensitive key patterns for sanitization
SENSITIVE_PATTERNS = [
    re.compile(r".*password.*", re.IGNORECASE),
    re.compile(r".*token.*", re.IGNORECASE),
    re.compile(r".*secret.*", re.IGNORECASE),
    re.compile(r"^dsn$", re.IGNORECASE),
]

REDACTED_VALUE = "[REDACTED]"


def sanitize_for_logging(data: Dict[str, Any]) -> Dict[str, Any]:
    """Redact sensitive values from a dictionary before logging.

    Args:
        data: Dictionary that may contain sensitive data

    Returns:
        New dictionary with sensitive values replaced by [REDACTED]

    Example:
        >>> sanitize_for_logging({"password": "secret123", "user": "admin"})
        {'password': '[REDACTED]', 'user': 'admin'}
    """
    sanitized: Dict[str, Any] = {}
    for key, value in data.items():
        if any(pattern.match(key) for pattern in SENSITIVE_PATTERNS):
            sanitized[key] = REDACTED_VALUE
        elif isinstance(value, dict):
            sanitized[key] = sanitize_for_logging(value)
        else:
            sanitized[key] = value
    return sanitized


def sanitization_processor(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> MutableMapping[str, Any]:
    """Structlog processor that redacts sensitive fields in event_dict."""
    return sanitize_for_logging(dict(event_dict))


def _get_log_level() -> int:
    """Get log level from settings, falling back to the raw environment."""
    try:
        level_name = get_settings().LOG_LEVEL.upper()
    except Exception:
        # Invalid SQLMAPPER_* values must not break logging setup
        level_name = os.getenv("LOG_LEVEL", "INFO").upper()

    return getattr(logging, level_name, logging.INFO)


def _configure_structlog() -> None:
    """Configure structlog with JSON rendering and sanitization."""
    level = _get_log_level()
    handler = logging.StreamHandler()
    handler.setLevel(level)

    package_logger = logging.getLogger("sql_mapper")
    package_logger.setLevel(level)
    if not package_logger.handlers:
        package_logger.addHandler(handler)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        sanitization_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Configure structlog on module import
_configure_structlog()


def get_logger(name: str) -> Any:
    """Get a structlog BoundLogger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        A structlog BoundLogger configured with JSON rendering and sanitization
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> Any:
    """Create a logger with bound context fields.

    Example:
        >>> logger = bind_context(table="user", dialect="postgresql")
        >>> logger.debug("statement.cached", key="insert")
    """
    return structlog.get_logger().bind(**kwargs)
