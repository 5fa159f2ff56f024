"""Forward campaign creation requests to the backend service port."""

from __future__ import annotations

from typing import Any
from typing import Mapping

from app.api.forwarding import BODY_JSON
from app.api.forwarding import ForwardingRoute
from app.api.forwarding import TARGET_STATIC
from app.api.forwarding import handle_forward
from app.utils.logging import configure_logging

configure_logging()

# The campaign endpoint is served on the app port, not through port 80.
BACKEND_APP_PORT = 3000

ROUTE = ForwardingRoute(
    name="trackier-create-campaigns",
    target=TARGET_STATIC,
    route="/api/trackier-create-campaigns",
    body_mode=BODY_JSON,
    method="POST",
    port=BACKEND_APP_PORT,
)


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    return handle_forward(event, ROUTE)
