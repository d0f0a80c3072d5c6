"""Initial routine tracker schema.

Revision ID: 20261019_000001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_000001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "routine",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("origin", sa.String(length=20), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("bio", sa.String(length=500), nullable=True),
        sa.Column("image_name", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_routine_is_active", "routine", ["is_active"])
    op.create_table(
        "app_setting",
        sa.Column("key", sa.String(length=100), nullable=False),
        sa.Column("value", sa.String(length=200), nullable=True),
        sa.PrimaryKeyConstraint("key"),
    )
    op.create_table(
        "task",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("routine_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("time", sa.String(length=10), nullable=False),
        sa.Column("order_index", sa.Integer(), nullable=False),
        sa.Column("is_completed_today", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["routine_id"], ["routine.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_task_routine_id", "task", ["routine_id"])
    op.create_table(
        "day_record",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("routine_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("completed_count", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.ForeignKeyConstraint(["routine_id"], ["routine.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("routine_id", "date", name="uq_day_record_routine_date"),
    )
    op.create_index("ix_day_record_routine_id", "day_record", ["routine_id"])
    op.create_table(
        "task_completion",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("day_record_id", sa.Integer(), nullable=False),
        sa.Column("task_id", sa.Integer(), nullable=False),
        sa.Column("task_title", sa.String(length=100), nullable=False),
        sa.Column("order_index", sa.Integer(), nullable=False),
        sa.Column("state", sa.String(length=20), nullable=False),
        sa.ForeignKeyConstraint(["day_record_id"], ["day_record.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("day_record_id", "task_id", name="uq_task_completion_record_task"),
    )
    op.create_index("ix_task_completion_day_record_id", "task_completion", ["day_record_id"])


def downgrade() -> None:
    op.drop_index("ix_task_completion_day_record_id", table_name="task_completion")
    op.drop_table("task_completion")
    op.drop_index("ix_day_record_routine_id", table_name="day_record")
    op.drop_table("day_record")
    op.drop_index("ix_task_routine_id", table_name="task")
    op.drop_table("task")
    op.drop_table("app_setting")
    op.drop_index("ix_routine_is_active", table_name="routine")
    op.drop_table("routine")
