"""Lambda handler returning the caller's role.

``GET /user-role`` answers ``{"role": ..., "is_admin": ..., "is_viewer": ...}``.
Unauthenticated callers, callers without a profile and lookup failures
all get ``role: null`` with status 200.
"""

from __future__ import annotations

from typing import Any
from typing import Mapping
from typing import Optional

from app.api.schemas import RoleResponse
from app.auth.roles import RoleLookup
from app.auth.roles import RoleResolver
from app.auth.roles import make_profile_lookup
from app.auth.session import SessionAuthClient
from app.auth.session import user_from_event
from app.config import ProxySettings
from app.db.engine import get_engine
from app.exceptions import MethodNotAllowedError
from app.utils.logging import configure_logging
from app.utils.logging import get_logger
from app.utils.logging import set_request_context
from app.utils.parsers import http_method
from app.utils.responses import app_error_response
from app.utils.responses import json_response
from app.utils.responses import preflight_response

configure_logging()
logger = get_logger(__name__)

CORS_METHODS = "GET, OPTIONS"


def _default_lookup(user_id: str) -> Optional[str]:
    # Engine creation is deferred so missing secrets surface as a lookup
    # error, which the resolver turns into role=None.
    return make_profile_lookup(get_engine())(user_id)


def handle(
    event: Mapping[str, Any],
    lookup_role: Optional[RoleLookup] = None,
    settings: Optional[ProxySettings] = None,
) -> dict[str, Any]:
    set_request_context(
        req_id=event.get("requestContext", {}).get("requestId"),
        fn_name="user-role",
    )
    cors = (settings or ProxySettings()).cors_for(CORS_METHODS)
    method = http_method(event)

    if method == "OPTIONS":
        return preflight_response(cors)
    if method != "GET":
        return app_error_response(MethodNotAllowedError(method), cors)

    auth_client = SessionAuthClient(user_from_event(event))
    with RoleResolver(auth_client, lookup_role or _default_lookup) as resolver:
        state = resolver.state()

    return json_response(
        200,
        RoleResponse(
            role=state.role,
            is_admin=state.is_admin,
            is_viewer=state.is_viewer,
        ),
        cors,
    )


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    return handle(event)
