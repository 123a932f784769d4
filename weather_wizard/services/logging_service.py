"""Structured logging configuration with redaction support."""

import logging
import sys
from typing import Any, Dict, TextIO

import structlog


def redact_sensitive(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Redact sensitive information from log entries.

    Redacts:
    - api_key fields (including the provider's ``appid`` query parameter)
    - Authorization headers
    - Any field containing 'secret' or 'password'
    """
    sensitive_keys = {
        "api_key",
        "appid",
        "authorization",
        "secret",
        "password",
    }

    for key in list(event_dict.keys()):
        key_lower = key.lower()
        if any(sensitive in key_lower for sensitive in sensitive_keys):
            event_dict[key] = "REDACTED"

    return event_dict


def configure_logging(log_level: str = "WARNING", stream: TextIO | None = None) -> None:
    """Configure structlog for JSON output with lookup ID support.

    Logs go to stderr by default so they never interleave with the
    dashboard drawn on stdout.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        stream: Output stream for log lines
    """
    stream = stream or sys.stderr
    level = getattr(logging, log_level.upper(), logging.WARNING)

    # Configure standard library logging
    logging.basicConfig(format="%(message)s", stream=stream, level=level)
    # httpx logs full request URLs at INFO, appid included
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))

    # Configure structlog processors
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_sensitive,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance.

    Args:
        name: Optional logger name for context

    Returns:
        Configured structlog logger
    """
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger_name=name)
    return logger
