"""Utility modules for the user administration Lambda."""

from user_admin.utils.logging import (
    clear_request_context,
    configure_logging,
    get_logger,
    log_response,
    mask_email,
    set_request_context,
)
from user_admin.utils.parsers import parse_bool, to_lower_camel
from user_admin.utils.responses import (
    gateway_response,
    get_cors_headers,
    json_response,
)

__all__ = [
    "clear_request_context",
    "configure_logging",
    "gateway_response",
    "get_cors_headers",
    "get_logger",
    "json_response",
    "log_response",
    "mask_email",
    "parse_bool",
    "set_request_context",
    "to_lower_camel",
]
