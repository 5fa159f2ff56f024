"""Generic pass-through to the backend load balancer.

The backend path comes from the ``path`` query parameter, e.g.
``/proxy-trackier?path=/api/trackier-status``. Method and body are
relayed verbatim.
"""

from __future__ import annotations

from typing import Any
from typing import Mapping

from app.api.forwarding import ForwardingRoute
from app.api.forwarding import TARGET_QUERY_PATH
from app.api.forwarding import handle_forward
from app.utils.logging import configure_logging

configure_logging()

ROUTE = ForwardingRoute(name="proxy-trackier", target=TARGET_QUERY_PATH)


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Forward the request to the backend path named in the query string."""
    return handle_forward(event, ROUTE)
