"""Repository for TraceOverride entities."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.db.models import TraceOverride
from app.db.repositories.base import BaseRepository

# Columns replaced when a row for the same key already exists.
_REPLACED_COLUMNS = (
    "enabled",
    "traces_per_day",
    "speed_multiplier",
    "trace_also_on_webhook",
)


class TraceOverrideRepository(BaseRepository[TraceOverride]):
    """Upsert of trace overrides keyed by account and offer."""

    def __init__(self, session: Session):
        super().__init__(session, TraceOverride)

    def upsert(
        self,
        account_id: str,
        offer_name: str,
        enabled: bool = True,
        traces_per_day: Optional[int] = None,
        speed_multiplier: Optional[float] = None,
        trace_also_on_webhook: bool = True,
    ) -> TraceOverride:
        """Insert or replace the override for ``(account_id, offer_name)``.

        Returns:
            The row as stored after the statement.
        """
        values = {
            "account_id": account_id,
            "offer_name": offer_name,
            "enabled": enabled,
            "traces_per_day": traces_per_day,
            "speed_multiplier": speed_multiplier,
            "trace_also_on_webhook": trace_also_on_webhook,
        }
        insert = self._upsert_statement().values(**values)
        replaced = {column: insert.excluded[column] for column in _REPLACED_COLUMNS}
        replaced["updated_at"] = func.now()
        statement = insert.on_conflict_do_update(
            index_elements=["account_id", "offer_name"],
            set_=replaced,
        ).returning(TraceOverride)

        result = self._session.scalars(
            statement,
            execution_options={"populate_existing": True},
        )
        row = result.one()
        self._session.flush()
        return row
