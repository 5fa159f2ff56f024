"""Lambda handler upserting a per account/offer trace override.

Accepts ``POST`` with a JSON body::

    {"account_id": "A", "offer_name": "O", "enabled": true,
     "traces_per_day": null, "speed_multiplier": null,
     "trace_also_on_webhook": true}

Only ``account_id`` and ``offer_name`` are required; the remaining
fields fall back to the defaults above. A second call with the same key
replaces the stored row.
"""

from __future__ import annotations

import json
from typing import Any
from typing import Mapping
from typing import Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.schemas import TraceOverrideRequest
from app.api.schemas import TraceOverrideResponse
from app.api.schemas import TraceOverrideSchema
from app.config import ProxySettings
from app.db.engine import get_engine
from app.db.repositories import TraceOverrideRepository
from app.exceptions import AppError
from app.exceptions import MethodNotAllowedError
from app.exceptions import ValidationError
from app.utils.logging import configure_logging
from app.utils.logging import get_logger
from app.utils.logging import set_request_context
from app.utils.parsers import http_method
from app.utils.parsers import read_body
from app.utils.responses import app_error_response
from app.utils.responses import error_response
from app.utils.responses import json_response
from app.utils.responses import preflight_response

configure_logging()
logger = get_logger(__name__)

CORS_METHODS = "POST, OPTIONS"


def parse_request(event: Mapping[str, Any]) -> TraceOverrideRequest:
    """Parse and validate the request body.

    Raises:
        ValidationError: If required keys are missing or a field has the
            wrong type.
        json.JSONDecodeError: If the body is not valid JSON.
    """
    raw = read_body(event)
    payload = json.loads(raw) if raw else None
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    try:
        request = TraceOverrideRequest.model_validate(payload)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        raise ValidationError(
            first.get("msg", "Invalid request"), field=field or None
        ) from exc

    if not request.account_id or not request.offer_name:
        raise ValidationError("Missing account_id or offer_name")
    return request


def handle(
    event: Mapping[str, Any],
    engine: Optional[Engine] = None,
    settings: Optional[ProxySettings] = None,
) -> dict[str, Any]:
    """Validate the body, upsert the override and return the stored row."""
    set_request_context(
        req_id=event.get("requestContext", {}).get("requestId"),
        fn_name="v5-set-trace-override",
    )
    cors = (settings or ProxySettings()).cors_for(CORS_METHODS)
    method = http_method(event)

    if method == "OPTIONS":
        return preflight_response(cors)

    try:
        if method != "POST":
            raise MethodNotAllowedError(method)

        request = parse_request(event)
        engine = engine or get_engine()
        with Session(engine) as session:
            row = TraceOverrideRepository(session).upsert(
                account_id=request.account_id,
                offer_name=request.offer_name,
                enabled=request.enabled,
                traces_per_day=request.traces_per_day,
                speed_multiplier=request.speed_multiplier,
                trace_also_on_webhook=request.trace_also_on_webhook,
            )
            override = TraceOverrideSchema.model_validate(row)
            session.commit()

        logger.info(
            "Trace override stored",
            extra={"account_id": override.account_id, "offer_name": override.offer_name},
        )
        return json_response(200, TraceOverrideResponse(override=override), cors)
    except AppError as exc:
        logger.warning(f"Trace override rejected: {exc.message}")
        return app_error_response(exc, cors)
    except SQLAlchemyError as exc:
        logger.exception("Trace override upsert failed")
        return error_response(500, str(getattr(exc, "orig", None) or exc), cors)
    except Exception as exc:
        logger.exception("Unexpected error in trace override")
        return error_response(500, str(exc) or "Internal error", cors)


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    return handle(event)
