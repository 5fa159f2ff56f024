"""Forward a webhook trigger for one Trackier offer.

``POST /trackier-trigger/<trackier_id>`` becomes
``POST <backend>/api/trackier-trigger/<trackier_id>``.
"""

from __future__ import annotations

from typing import Any
from typing import Mapping

from app.api.forwarding import BODY_JSON
from app.api.forwarding import ForwardingRoute
from app.api.forwarding import TARGET_PATH_SEGMENT
from app.api.forwarding import handle_forward
from app.utils.logging import configure_logging

configure_logging()

ROUTE = ForwardingRoute(
    name="trackier-trigger",
    target=TARGET_PATH_SEGMENT,
    route="/api/trackier-trigger",
    body_mode=BODY_JSON,
    method="POST",
)


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    return handle_forward(event, ROUTE)
