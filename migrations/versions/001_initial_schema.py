"""Initial schema.

Revision ID: 001
Revises:
Create Date: 2026-10-19

Users and their scheduled events.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint("user_id"),
        sa.UniqueConstraint("username"),
    )

    op.create_table(
        "events",
        sa.Column("event_id", sa.String(36), nullable=False),
        sa.Column("event_name", sa.String(255), nullable=False),
        sa.Column("execute_at", sa.DateTime(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("pending", "executed", name="event_status"),
            nullable=False,
        ),
        sa.Column("executed_at", sa.DateTime(), nullable=True),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.user_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("event_id"),
    )
    op.create_index("ix_events_user_id", "events", ["user_id"])
    # Scheduler scan: pending rows ordered by execution time
    op.create_index("ix_events_status_execute_at", "events", ["status", "execute_at"])


def downgrade() -> None:
    op.drop_index("ix_events_status_execute_at", table_name="events")
    op.drop_index("ix_events_user_id", table_name="events")
    op.drop_table("events")
    op.drop_table("users")
    sa.Enum(name="event_status").drop(op.get_bind(), checkfirst=True)
