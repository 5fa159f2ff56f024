"""Add trace_date to daily_trace_counts.

Counts become per day: existing rows are stamped with the current date
and an index covers the (offer, account, day) lookup.
"""

from __future__ import annotations

from typing import Sequence
from typing import Union

from alembic import op
import sqlalchemy as sa

revision: str = "0002_add_trace_date"
down_revision: Union[str, None] = "0001_initial_schema"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Add trace_date column, backfill it and index it."""

    op.add_column(
        "daily_trace_counts",
        sa.Column(
            "trace_date",
            sa.Date(),
            nullable=True,
            server_default=sa.text("CURRENT_DATE"),
        ),
    )
    op.execute(
        "UPDATE daily_trace_counts SET trace_date = CURRENT_DATE "
        "WHERE trace_date IS NULL"
    )
    op.create_index(
        "idx_daily_trace_counts_date",
        "daily_trace_counts",
        ["offer_name", "account_id", "trace_date"],
    )


def downgrade() -> None:
    """Remove trace_date column and its index."""

    op.drop_index("idx_daily_trace_counts_date", table_name="daily_trace_counts")
    op.drop_column("daily_trace_counts", "trace_date")
