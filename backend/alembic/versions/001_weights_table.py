"""Initial schema — weights table with one row per date.

Revision ID: 001_weights
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_weights"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "weights",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("weight", sa.Float, nullable=False),
        sa.Column("date", sa.String(10), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
        sa.UniqueConstraint("date", name="uq_weights_date"),
        sa.CheckConstraint("weight > 0", name="ck_weights_weight_positive"),
        sqlite_autoincrement=True,
    )


def downgrade() -> None:
    op.drop_table("weights")
