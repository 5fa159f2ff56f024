"""Lambda entrypoint for the Trackier trigger forwarding."""

from __future__ import annotations

from typing import Any
from typing import Mapping

from app.api.trackier_trigger import lambda_handler as _handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Delegate to the Trackier trigger forwarding handler."""
    return _handler(event, context)
