"""Lambda entrypoint for the trace_date migration attempt."""

from __future__ import annotations

from typing import Any
from typing import Mapping

from app.api.run_migration import lambda_handler as _handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Delegate to the trace_date migration attempt handler."""
    return _handler(event, context)
