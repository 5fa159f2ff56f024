"""Maintenance operations: purge procedure and the trace_date migration."""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy import func
from sqlalchemy import inspect
from sqlalchemy import select
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

ADD_TRACE_DATE_SQL = (
    "ALTER TABLE daily_trace_counts "
    "ADD COLUMN IF NOT EXISTS trace_date DATE DEFAULT CURRENT_DATE;"
)

MANUAL_TRACE_DATE_SQL = "\n".join(
    (
        ADD_TRACE_DATE_SQL,
        "CREATE INDEX IF NOT EXISTS idx_daily_trace_counts_date "
        "ON daily_trace_counts(offer_name, account_id, trace_date);",
        "UPDATE daily_trace_counts SET trace_date = CURRENT_DATE "
        "WHERE trace_date IS NULL;",
    )
)

MANUAL_MIGRATION_INSTRUCTIONS = (
    "Please run this SQL in the database SQL editor:\n\n" + MANUAL_TRACE_DATE_SQL
)


class MaintenanceRepository:
    """Operations that do not map onto a single model."""

    def __init__(self, session: Session):
        self._session = session

    def purge_all_old_data(self) -> dict[str, Any]:
        """Call ``v5_purge_all_old_data()`` and return its counters.

        The procedure returns JSON; drivers hand it back either decoded
        or as text.
        """
        raw = self._session.execute(select(func.v5_purge_all_old_data())).scalar()
        if raw is None:
            return {}
        if isinstance(raw, (str, bytes)):
            raw = json.loads(raw)
        return dict(raw)


class TraceDateMigration:
    """Best-effort runtime attempt at adding ``daily_trace_counts.trace_date``.

    The supported path is the Alembic revision ``0002_add_trace_date``;
    this only exists for deployments that cannot run migrations.
    """

    table = "daily_trace_counts"
    column = "trace_date"

    def __init__(self, engine: Engine):
        self._engine = engine

    def apply(self) -> None:
        """Execute the ``ALTER TABLE`` in its own transaction.

        Raises:
            sqlalchemy.exc.SQLAlchemyError: If the statement is rejected.
        """
        with self._engine.begin() as connection:
            connection.execute(text(ADD_TRACE_DATE_SQL))

    def column_exists(self) -> bool:
        """Probe the live schema for the column.

        Raises:
            sqlalchemy.exc.NoSuchTableError: If the table itself is missing.
        """
        with self._engine.connect() as connection:
            columns = inspect(connection).get_columns(self.table)
        return any(column["name"] == self.column for column in columns)
