"""User profile model."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import CheckConstraint, DateTime, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class UserProfile(Base):
    """Per-user profile row holding the authorization role.

    The primary key is the identity provider's user id.
    """

    __tablename__ = "user_profiles"
    __table_args__ = (
        CheckConstraint(
            "role IN ('admin', 'viewer')",
            name="ck_user_profiles_role",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid(), primary_key=True)
    email: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    role: Mapped[str] = mapped_column(
        Text(),
        nullable=False,
        default="viewer",
        server_default="viewer",
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
