"""Initial schema for the tables the edge functions touch.

Creates ``user_profiles``, ``v5_trace_overrides`` and
``daily_trace_counts`` (without ``trace_date``, added in 0002).
"""

from __future__ import annotations

from typing import Sequence
from typing import Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create base tables."""

    op.create_table(
        "user_profiles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column(
            "role",
            sa.Text(),
            nullable=False,
            server_default=sa.text("'viewer'"),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint(
            "role IN ('admin', 'viewer')",
            name="ck_user_profiles_role",
        ),
    )

    op.create_table(
        "v5_trace_overrides",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("account_id", sa.Text(), nullable=False),
        sa.Column("offer_name", sa.Text(), nullable=False),
        sa.Column(
            "enabled",
            sa.Boolean(),
            nullable=False,
            server_default=sa.true(),
        ),
        sa.Column("traces_per_day", sa.Integer(), nullable=True),
        sa.Column("speed_multiplier", sa.Float(), nullable=True),
        sa.Column(
            "trace_also_on_webhook",
            sa.Boolean(),
            nullable=False,
            server_default=sa.true(),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.UniqueConstraint(
            "account_id",
            "offer_name",
            name="uq_v5_trace_overrides_account_offer",
        ),
    )

    op.create_table(
        "daily_trace_counts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("account_id", sa.Text(), nullable=False),
        sa.Column("offer_name", sa.Text(), nullable=False),
        sa.Column(
            "trace_count",
            sa.Integer(),
            nullable=False,
            server_default=sa.text("0"),
        ),
    )


def downgrade() -> None:
    """Drop base tables."""

    op.drop_table("daily_trace_counts")
    op.drop_table("v5_trace_overrides")
    op.drop_table("user_profiles")
