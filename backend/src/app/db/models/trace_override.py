"""Per account/offer trace override model."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    Integer,
    Text,
    UniqueConstraint,
    Uuid,
    func,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class TraceOverride(Base):
    """Trace generation settings for one (account, offer) pair.

    Rows are only ever upserted on ``(account_id, offer_name)``.
    """

    __tablename__ = "v5_trace_overrides"
    __table_args__ = (
        UniqueConstraint(
            "account_id",
            "offer_name",
            name="uq_v5_trace_overrides_account_offer",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid(), primary_key=True, default=uuid4)
    account_id: Mapped[str] = mapped_column(Text(), nullable=False)
    offer_name: Mapped[str] = mapped_column(Text(), nullable=False)
    enabled: Mapped[bool] = mapped_column(
        Boolean(),
        nullable=False,
        default=True,
        server_default=true(),
    )
    traces_per_day: Mapped[Optional[int]] = mapped_column(Integer(), nullable=True)
    speed_multiplier: Mapped[Optional[float]] = mapped_column(Float(), nullable=True)
    trace_also_on_webhook: Mapped[bool] = mapped_column(
        Boolean(),
        nullable=False,
        default=True,
        server_default=true(),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
