"""Lambda entrypoint for the Trackier campaign creation forwarding."""

from __future__ import annotations

from typing import Any
from typing import Mapping

from app.api.trackier_create_campaigns import lambda_handler as _handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Delegate to the Trackier campaign creation forwarding handler."""
    return _handler(event, context)
