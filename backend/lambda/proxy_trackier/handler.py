"""Lambda entrypoint for the proxy pass-through."""

from __future__ import annotations

from typing import Any
from typing import Mapping

from app.api.proxy_trackier import lambda_handler as _handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Delegate to the proxy pass-through handler."""
    return _handler(event, context)
