"""Create game_stats table

Revision ID: 002
Revises: 001
Create Date: 2026-10-17

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "game_stats",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("game_type", sa.String(length=32), nullable=False),
        sa.Column("total_hours", sa.Float(), nullable=False, server_default="0"),
        sa.Column("high_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_score", sa.Integer(), nullable=False, server_default="0"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "game_type", name="uq_game_stats_user_game"),
    )
    op.create_index(op.f("ix_game_stats_user_id"), "game_stats", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_game_stats_user_id"), table_name="game_stats")
    op.drop_table("game_stats")
