"""initial schema

Revision ID: 5b1e9c2d7a40
Revises:
Create Date: 2025-11-03 18:42:10.512934

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5b1e9c2d7a40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

report_status = sa.Enum("PENDING", "REVIEWED", "RESOLVED", "DISMISSED", name="report_status")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Create users, maps, smokes, ratings and reports."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("steam_id", sa.String(length=32), nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("steam_id"),
    )
    op.create_table(
        "maps",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("thumbnail", sa.Text(), nullable=True),
        sa.Column("radar", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "smokes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("video_url", sa.Text(), nullable=False),
        sa.Column("timestamp", sa.Integer(), nullable=False),
        sa.Column("x_coord", sa.Float(), nullable=False),
        sa.Column("y_coord", sa.Float(), nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("map_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("timestamp > 0", name="ck_smokes_timestamp_positive"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["map_id"], ["maps.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_smokes_author_id", "smokes", ["author_id"])
    op.create_index("ix_smokes_map_id_deleted_at", "smokes", ["map_id", "deleted_at"])

    op.create_table(
        "ratings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("value", sa.SmallInteger(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("smoke_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("value IN (1, -1)", name="ck_ratings_value"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["smoke_id"], ["smokes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "smoke_id", name="uq_ratings_user_id_smoke_id"),
    )
    op.create_index("ix_ratings_smoke_id", "ratings", ["smoke_id"])

    op.create_table(
        "reports",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("reason", sa.String(length=500), nullable=False),
        sa.Column("status", report_status, nullable=False),
        sa.Column("reporter_id", sa.Integer(), nullable=False),
        sa.Column("smoke_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["reporter_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["smoke_id"], ["smokes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("reporter_id", "smoke_id", name="uq_reports_reporter_id_smoke_id"),
    )
    op.create_index("ix_reports_smoke_id", "reports", ["smoke_id"])


def downgrade() -> None:
    """Drop every table created by this revision."""
    op.drop_index("ix_reports_smoke_id", table_name="reports")
    op.drop_table("reports")
    op.drop_index("ix_ratings_smoke_id", table_name="ratings")
    op.drop_table("ratings")
    op.drop_index("ix_smokes_map_id_deleted_at", table_name="smokes")
    op.drop_index("ix_smokes_author_id", table_name="smokes")
    op.drop_table("smokes")
    op.drop_table("maps")
    op.drop_table("users")
    report_status.drop(op.get_bind(), checkfirst=True)
