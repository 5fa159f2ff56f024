"""Lambda handler invoking the ``v5_purge_all_old_data`` procedure.

Intended for a scheduled trigger. The procedure's counters are relayed
as ``stats``; any failure fails the whole request.
"""

from __future__ import annotations

from typing import Any
from typing import Mapping
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.schemas import PurgeResponse
from app.config import ProxySettings
from app.db.engine import get_engine
from app.db.repositories import MaintenanceRepository
from app.exceptions import AppError
from app.utils.logging import configure_logging
from app.utils.logging import get_logger
from app.utils.logging import set_request_context
from app.utils.parsers import http_method
from app.utils.responses import error_response
from app.utils.responses import json_response
from app.utils.responses import preflight_response

configure_logging()
logger = get_logger(__name__)

CORS_METHODS = "POST, OPTIONS"
COUNTERS = ("campaign_logs_purged", "trace_logs_purged", "bucket_entries_purged")


def handle(
    event: Mapping[str, Any],
    engine: Optional[Engine] = None,
    settings: Optional[ProxySettings] = None,
) -> dict[str, Any]:
    set_request_context(
        req_id=event.get("requestContext", {}).get("requestId"),
        fn_name="v5-purge-old-data",
    )
    cors = (settings or ProxySettings()).cors_for(CORS_METHODS)

    if http_method(event) == "OPTIONS":
        return preflight_response(cors)

    try:
        engine = engine or get_engine()
        with Session(engine) as session:
            stats = MaintenanceRepository(session).purge_all_old_data()
            session.commit()
    except AppError as exc:
        logger.error(f"Purge failed: {exc.message}")
        return error_response(exc.status_code, exc.message, cors, success=False)
    except SQLAlchemyError as exc:
        logger.exception("Purge procedure failed")
        message = str(getattr(exc, "orig", None) or exc)
        return error_response(500, message, cors, success=False)
    except Exception as exc:
        logger.exception("Unexpected error in purge")
        return error_response(500, str(exc), cors, success=False)

    logger.info(
        "Purge completed",
        extra={name: stats.get(name) or 0 for name in COUNTERS},
    )
    return json_response(200, PurgeResponse(stats=stats), cors)


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    return handle(event)
