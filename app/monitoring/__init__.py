"""
Logging support for the API.

Usage
-----
>>> from app.monitoring import configure_structlog, get_logger
>>> configure_structlog()
>>> get_logger(__name__).info("ready")
"""

from app.monitoring.logging import (
    RequestIdFilter,
    bind_request_id,
    clear_context,
    configure_structlog,
    get_logger,
    get_request_id,
    redact_pii,
    sanitize_headers,
    sanitize_log_message,
)

__all__ = [
    "RequestIdFilter",
    "bind_request_id",
    "clear_context",
    "configure_structlog",
    "get_logger",
    "get_request_id",
    "redact_pii",
    "sanitize_headers",
    "sanitize_log_message",
]
