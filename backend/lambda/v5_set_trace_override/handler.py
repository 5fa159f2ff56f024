"""Lambda entrypoint for the trace override upsert."""

from __future__ import annotations

from typing import Any
from typing import Mapping

from app.api.trace_override import lambda_handler as _handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Delegate to the trace override upsert handler."""
    return _handler(event, context)
