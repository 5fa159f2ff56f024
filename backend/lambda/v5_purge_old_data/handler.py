"""Lambda entrypoint for the scheduled data purge."""

from __future__ import annotations

from typing import Any
from typing import Mapping

from app.api.purge_old_data import lambda_handler as _handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Delegate to the scheduled data purge handler."""
    return _handler(event, context)
