"""Shared parsing utilities for request handling."""

from __future__ import annotations

import base64
import json
from typing import Any
from typing import Mapping
from typing import Optional


def http_method(event: Mapping[str, Any]) -> str:
    """Return the upper-cased request method (REST or HTTP API events)."""
    method = event.get("httpMethod")
    if not method:
        method = (
            event.get("requestContext", {}).get("http", {}).get("method") or "GET"
        )
    return str(method).upper()


def read_body(event: Mapping[str, Any]) -> str:
    """Return the full request body as text, decoding base64 payloads."""
    raw = event.get("body") or ""
    if event.get("isBase64Encoded") and raw:
        return base64.b64decode(raw).decode("utf-8")
    return raw


def read_json_body(event: Mapping[str, Any]) -> Any:
    """Parse the request body as JSON.

    Raises:
        json.JSONDecodeError: If the body is empty or malformed.
    """
    return json.loads(read_body(event))


def last_path_segment(event: Mapping[str, Any]) -> str:
    """Return the final segment of the request path ('' for '/')."""
    path = event.get("path") or event.get("rawPath") or ""
    return str(path).rstrip("/").rsplit("/", 1)[-1]


def first_param(params: dict[str, list[str]], key: str) -> Optional[str]:
    """Return the first query parameter value for a key."""
    values = params.get(key, [])
    return values[0] if values else None


def collect_query_params(event: Mapping[str, Any]) -> dict[str, list[str]]:
    """Collect query parameters from API Gateway events.

    Handles both single and multi-value query string parameters.

    Args:
        event: The API Gateway event dictionary.

    Returns:
        Dictionary mapping parameter names to lists of values.
    """
    params: dict[str, list[str]] = {}
    single = event.get("queryStringParameters") or {}
    multi = event.get("multiValueQueryStringParameters") or {}

    for key, values in multi.items():
        for value in values or []:
            if value is not None:
                params.setdefault(key, []).append(value)

    for key, value in single.items():
        if value is not None and key not in params:
            params[key] = [value]

    return params
