"""Observability layer for the chat service.

This module provides structured logging, request tracing via correlation IDs,
and redaction helpers so provider credentials never reach the logs.

Usage:
    from athey.observability import get_logger

    logger = get_logger(__name__)
    logger.info("context.build.started", providers=4)
"""

from athey.observability.context import (
    correlation_id_var,
    get_correlation_id,
    set_correlation_id,
)
from athey.observability.logger import configure_logging, get_logger
from athey.observability.middleware import (
    CorrelationIDMiddleware,
    RequestLoggingMiddleware,
)
from athey.observability.sanitizer import sanitize, sanitize_url

__all__ = [
    # Context
    "correlation_id_var",
    "get_correlation_id",
    "set_correlation_id",
    # Logger
    "configure_logging",
    "get_logger",
    # Middleware
    "CorrelationIDMiddleware",
    "RequestLoggingMiddleware",
    # Sanitizer
    "sanitize",
    "sanitize_url",
]
