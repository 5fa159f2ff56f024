"""Daily trace counter model."""

from __future__ import annotations

from datetime import date
from typing import Optional
from uuid import UUID
from uuid import uuid4

from sqlalchemy import Date, Index, Integer, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class DailyTraceCount(Base):
    """Number of traces generated for an offer on a given day."""

    __tablename__ = "daily_trace_counts"
    __table_args__ = (
        Index(
            "idx_daily_trace_counts_date",
            "offer_name",
            "account_id",
            "trace_date",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid(), primary_key=True, default=uuid4)
    account_id: Mapped[str] = mapped_column(Text(), nullable=False)
    offer_name: Mapped[str] = mapped_column(Text(), nullable=False)
    trace_count: Mapped[int] = mapped_column(
        Integer(),
        nullable=False,
        default=0,
        server_default="0",
    )
    trace_date: Mapped[Optional[date]] = mapped_column(
        Date(),
        nullable=True,
        server_default=func.current_date(),
    )
