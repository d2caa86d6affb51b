"""Structured logging infrastructure.

This package provides centralized logging configuration and utilities
for the IP geolocation service using structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - bind_request_context(): Context manager for request-scoped logging
    - get_correlation_id(): Get current correlation ID from context

Formatters:
    - add_app_info(): Processor to add app name/version
    - mask_sensitive_data(): Processor to redact credentials and drop addresses
    - truncate_large_values(): Processor to limit string lengths

Example:
    import structlog
    from infrastructure.logging import configure_logging, bind_request_context

    # At application startup
    configure_logging()

    # In a module
    logger = structlog.get_logger()
    with bind_request_context(transport="stdio"):
        logger.info("mcp_request_handled")
"""

# Core logging setup
from infrastructure.logging.setup import configure_logging

# Request context binding
from infrastructure.logging.context import (
    bind_request_context,
    get_correlation_id,
)

# Log formatters/processors
from infrastructure.logging.formatters import (
    add_app_info,
    mask_sensitive_data,
    truncate_large_values,
    ADDRESS_KEYS,
    SENSITIVE_PATTERNS,
)

__all__ = [
    # Setup
    "configure_logging",
    # Context
    "bind_request_context",
    "get_correlation_id",
    # Formatters
    "add_app_info",
    "mask_sensitive_data",
    "truncate_large_values",
    "ADDRESS_KEYS",
    "SENSITIVE_PATTERNS",
]
