"""Lambda handler attempting the ``daily_trace_counts.trace_date`` migration.

Schema changes belong to the Alembic revisions under ``backend/db``.
This handler is a fallback: it tries the ``ALTER TABLE`` and, when the
database refuses and the column is still missing, answers with the SQL
an operator has to run by hand.
"""

from __future__ import annotations

from typing import Any
from typing import Mapping
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.config import ProxySettings
from app.db.engine import get_engine
from app.db.repositories import TraceDateMigration
from app.db.repositories.maintenance import MANUAL_MIGRATION_INSTRUCTIONS
from app.utils.logging import configure_logging
from app.utils.logging import get_logger
from app.utils.logging import set_request_context
from app.utils.parsers import http_method
from app.utils.responses import error_response
from app.utils.responses import json_response
from app.utils.responses import preflight_response

configure_logging()
logger = get_logger(__name__)


def handle(
    event: Mapping[str, Any],
    engine: Optional[Engine] = None,
    settings: Optional[ProxySettings] = None,
) -> dict[str, Any]:
    set_request_context(
        req_id=event.get("requestContext", {}).get("requestId"),
        fn_name="run-migration",
    )
    cors = (settings or ProxySettings()).cors_for()

    if http_method(event) == "OPTIONS":
        return preflight_response(cors)

    try:
        migration = TraceDateMigration(engine or get_engine())
        try:
            migration.apply()
        except SQLAlchemyError as exc:
            logger.warning(f"ALTER TABLE rejected, probing schema: {exc}")
            if not migration.column_exists():
                return error_response(
                    500, MANUAL_MIGRATION_INSTRUCTIONS, cors, success=False
                )
    except Exception as exc:
        logger.exception("Migration attempt failed")
        return error_response(
            500,
            getattr(exc, "message", None) or str(exc),
            cors,
            success=False,
            instructions=MANUAL_MIGRATION_INSTRUCTIONS,
        )

    return json_response(
        200,
        {"success": True, "message": "Migration completed successfully"},
        cors,
    )


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    return handle(event)
