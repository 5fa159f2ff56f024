"""Shared response builders for the Lambda handlers.

Every response carries the CORS headers it is given; bodies other than
preflight responses are labelled ``application/json``.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any
from typing import Mapping
from typing import Optional

from pydantic import BaseModel

from app.exceptions import AppError


def preflight_response(cors_headers: Mapping[str, str]) -> dict[str, Any]:
    """Answer an ``OPTIONS`` request with CORS headers and no body."""
    return {
        "statusCode": 200,
        "headers": dict(cors_headers),
        "body": "",
    }


def raw_response(
    status_code: int,
    body: str,
    cors_headers: Mapping[str, str],
) -> dict[str, Any]:
    """Relay a body that is already serialized."""
    response_headers = dict(cors_headers)
    response_headers["Content-Type"] = "application/json"
    return {
        "statusCode": status_code,
        "headers": response_headers,
        "body": body,
    }


def json_response(
    status_code: int,
    body: Any,
    cors_headers: Mapping[str, str],
    headers: Optional[Mapping[str, str]] = None,
) -> dict[str, Any]:
    """Create a JSON API Gateway response.

    Args:
        status_code: HTTP status code.
        body: Response body (dict, Pydantic model, or dataclass).
        cors_headers: CORS headers for the calling function.
        headers: Optional additional headers.

    Returns:
        API Gateway response dictionary.
    """
    response = raw_response(
        status_code,
        json.dumps(_serialize_body(body), default=str),
        cors_headers,
    )
    if headers:
        response["headers"].update(headers)
    return response


def error_response(
    status_code: int,
    message: str,
    cors_headers: Mapping[str, str],
    **fields: Any,
) -> dict[str, Any]:
    """Create an ``{"error": message}`` response with optional extra fields."""
    body: dict[str, Any] = dict(fields)
    body["error"] = message
    return json_response(status_code, body, cors_headers)


def app_error_response(
    exc: AppError,
    cors_headers: Mapping[str, str],
) -> dict[str, Any]:
    """Translate an ``AppError`` into its status and body."""
    return json_response(exc.status_code, exc.to_dict(), cors_headers)


def _serialize_body(body: Any) -> Any:
    """Serialize response body to a JSON-compatible value."""
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json")

    if hasattr(body, "__dataclass_fields__"):
        return asdict(body)

    return body
