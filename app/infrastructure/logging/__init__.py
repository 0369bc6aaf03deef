"""Structured logging (structlog) for the push gateway.

    from infrastructure.logging import get_module_logger

    logger = get_module_logger()
    logger.info("push_delivered", provider="fcm")

Request-scoped fields (correlation id, path, caller address) are bound by
the server middleware through `bind_request_context`.
"""

from infrastructure.logging.context import bind_request_context, get_correlation_id
from infrastructure.logging.formatters import (
    SENSITIVE_PATTERNS,
    add_environment_info,
    mask_sensitive_data,
    truncate_large_values,
)
from infrastructure.logging.setup import configure_logging, get_logger, get_module_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "get_module_logger",
    "bind_request_context",
    "get_correlation_id",
    "mask_sensitive_data",
    "truncate_large_values",
    "add_environment_info",
    "SENSITIVE_PATTERNS",
]
