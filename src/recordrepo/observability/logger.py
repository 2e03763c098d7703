"""
Structured Logging Configuration
Centralized structlog setup; repository failures are logged with
entity, operation and error code context
"""
from __future__ import annotations

import logging
import sys
from typing import Any, Optional

import structlog

from recordrepo.config import get_settings


def configure_logging(log_level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
    """
    Configure structured logging for the application.

    Sets up structlog with processors for:
    - Adding timestamps
    - Adding log levels
    - Adding bound context variables
    - JSON formatting (production) or console (development)

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL); settings when None
        json_logs: Whether to output JSON format; settings when None
    """
    settings = get_settings()
    level = (log_level or settings.LOG_LEVEL).upper()
    as_json = settings.LOG_JSON if json_logs is None else json_logs

    # Configure standard logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
    )

    # Define structlog processors
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    # Add JSON or console renderer
    if as_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Usage:
        logger = get_logger(__name__)
        logger.warning("Store access failed", entity="ExampleType", operation="find_one")
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """
    Bind context variables to all subsequent log entries.

    Usage:
        bind_context(request_id=request_id, entity="ExampleType")
    """
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()
