"""Initial schema — special_days, profiles.

Revision ID: 001_special_days
Revises: None
Create Date: 2025-09-10

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_special_days"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("display_name", sa.String(100), nullable=True),
        sa.Column("name", sa.String(100), nullable=True),
        sa.Column("username", sa.String(100), nullable=True),
        sa.Column("full_name", sa.String(200), nullable=True),
    )

    op.create_table(
        "special_days",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), nullable=True),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("title", sa.Text, nullable=True),
        sa.Column("note", sa.Text, nullable=True),
        sa.Column("kind", sa.String(20), nullable=False, server_default="other"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "kind IN ('birthday', 'anniversary', 'other')",
            name="ck_special_days_kind",
        ),
    )
    op.create_index("ix_special_days_date", "special_days", ["date"])
    op.create_index("ix_special_days_user_id", "special_days", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_special_days_user_id", table_name="special_days")
    op.drop_index("ix_special_days_date", table_name="special_days")
    op.drop_table("special_days")
    op.drop_table("profiles")
