"""Generic request forwarding for the backend load balancer.

Each forwarding Lambda is a ``ForwardingRoute`` plus a one-line
``lambda_handler``. The route decides how the backend URL is built and
whether bodies travel as raw text or as parsed JSON; everything else
(preflight, CORS, status relay, error translation) is shared.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from typing import Any
from typing import Mapping
from typing import Optional
from urllib.parse import quote

from app.config import ProxySettings
from app.exceptions import AppError
from app.exceptions import ValidationError
from app.services.backend_http import BackendClient
from app.utils.logging import get_logger
from app.utils.logging import log_lambda_event
from app.utils.logging import log_response
from app.utils.logging import set_request_context
from app.utils.parsers import collect_query_params
from app.utils.parsers import first_param
from app.utils.parsers import http_method
from app.utils.parsers import last_path_segment
from app.utils.parsers import read_body
from app.utils.parsers import read_json_body
from app.utils.responses import app_error_response
from app.utils.responses import error_response
from app.utils.responses import preflight_response
from app.utils.responses import raw_response

logger = get_logger(__name__)

TARGET_QUERY_PATH = "query_path"
TARGET_STATIC = "static"
TARGET_PATH_SEGMENT = "path_segment"

BODY_TEXT = "text"
BODY_JSON = "json"


@dataclass(frozen=True)
class ForwardingRoute:
    """How one Lambda maps an inbound request onto the backend.

    Attributes:
        name: Function name, used in logs.
        target: ``query_path`` appends the ``path`` query parameter,
            ``static`` appends ``route``, ``path_segment`` appends
            ``route`` plus the last segment of the inbound path.
        route: Static path suffix on the backend.
        body_mode: ``text`` relays bodies verbatim; ``json`` parses the
            inbound body and the backend response and re-serializes both.
        method: Fixed outbound method, or None to mirror the inbound one.
        port: Backend port override.
    """

    name: str
    target: str = TARGET_STATIC
    route: str = ""
    body_mode: str = BODY_TEXT
    method: Optional[str] = None
    port: Optional[int] = None


def build_backend_url(
    event: Mapping[str, Any],
    route: ForwardingRoute,
    settings: ProxySettings,
) -> str:
    """Build the outbound URL from the configured base, never from headers.

    Raises:
        ValidationError: If the ``path`` parameter or path segment could
            escape the backend host.
    """
    base = settings.base_url(route.port)

    if route.target == TARGET_QUERY_PATH:
        path = first_param(collect_query_params(event), "path") or ""
        if path and not path.startswith("/"):
            raise ValidationError("path must start with '/'", field="path")
        return f"{base}{path}"

    if route.target == TARGET_PATH_SEGMENT:
        segment = last_path_segment(event)
        if not segment:
            raise ValidationError("Missing identifier in request path")
        return f"{base}{route.route}/{quote(segment, safe='')}"

    return f"{base}{route.route}"


def _compact_json(value: Any) -> str:
    """Serialize without whitespace, keeping non-ASCII characters as-is."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _outbound_body(method: str, event: Mapping[str, Any], route: ForwardingRoute) -> Optional[str]:
    """Read the inbound body eagerly; malformed JSON raises."""
    if method == "GET":
        return None
    if route.body_mode == BODY_JSON:
        return _compact_json(read_json_body(event))
    return read_body(event)


def handle_forward(
    event: Mapping[str, Any],
    route: ForwardingRoute,
    settings: Optional[ProxySettings] = None,
    client: Optional[BackendClient] = None,
) -> dict[str, Any]:
    """Relay one API Gateway request to the backend and its answer back.

    Args:
        event: API Gateway proxy event.
        route: Forwarding rules of the calling Lambda.
        settings: Proxy settings; read from the environment when omitted.
        client: HTTP client; built from ``settings`` when omitted.

    Returns:
        API Gateway response carrying the backend status and body.
    """
    set_request_context(
        req_id=event.get("requestContext", {}).get("requestId"),
        fn_name=route.name,
    )
    cors = (settings or ProxySettings()).cors_for()
    method = http_method(event)

    if method == "OPTIONS":
        return preflight_response(cors)

    log_lambda_event(logger, event)
    started = time.perf_counter()

    try:
        settings = settings or ProxySettings.from_env()
        body = _outbound_body(method, event, route)
        url = build_backend_url(event, route, settings)
        client = client or BackendClient(timeout=settings.timeout)
        backend = client.send(route.method or method, url, body=body)

        payload = backend.body
        if route.body_mode == BODY_JSON:
            payload = _compact_json(json.loads(backend.body))

        log_response(logger, backend.status, (time.perf_counter() - started) * 1000)
        return raw_response(backend.status, payload, cors)
    except AppError as exc:
        logger.warning(f"{route.name} failed: {exc.message}")
        return app_error_response(exc, cors)
    except Exception as exc:
        logger.exception(f"{route.name} failed")
        return error_response(500, str(exc) or type(exc).__name__, cors)
