"""Lambda entrypoint for the caller role lookup."""

from __future__ import annotations

from typing import Any
from typing import Mapping

from app.api.user_role import lambda_handler as _handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Delegate to the caller role lookup handler."""
    return _handler(event, context)
