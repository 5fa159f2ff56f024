"""Header helpers shared by the auth modules."""

from __future__ import annotations

from typing import Any
from typing import Mapping


def get_header(headers: Mapping[str, Any], name: str) -> str:
    """Get a header value case-insensitively."""
    for key, value in headers.items():
        if key.lower() == name.lower():
            return str(value)
    return ''


def extract_token(headers: Mapping[str, Any]) -> str | None:
    """Extract the bearer token from the Authorization header."""
    auth_header = get_header(headers, 'authorization')
    if not auth_header:
        return None

    if auth_header.lower().startswith('bearer '):
        return auth_header[7:].strip() or None
    return auth_header.strip() or None
