"""Utility modules for the edge functions."""

from app.utils.logging import (
    clear_request_context,
    configure_logging,
    get_logger,
    mask_pii,
    set_request_context,
)
from app.utils.parsers import (
    collect_query_params,
    first_param,
    http_method,
    last_path_segment,
    read_body,
    read_json_body,
)
from app.utils.responses import (
    app_error_response,
    error_response,
    json_response,
    preflight_response,
    raw_response,
)

__all__ = [
    "app_error_response",
    "clear_request_context",
    "collect_query_params",
    "configure_logging",
    "error_response",
    "first_param",
    "get_logger",
    "http_method",
    "json_response",
    "last_path_segment",
    "mask_pii",
    "preflight_response",
    "raw_response",
    "read_body",
    "read_json_body",
    "set_request_context",
]
