"""create pins table

Revision ID: 3f9c2a7d1b40
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# Alembic identifiers
revision: str = "3f9c2a7d1b40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "pins",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.CheckConstraint("latitude BETWEEN -90 AND 90", name="ck_pins_latitude_range"),
        sa.CheckConstraint("longitude BETWEEN -180 AND 180", name="ck_pins_longitude_range"),
    )
    op.create_index("ix_pins_latitude", "pins", ["latitude"], unique=False)
    op.create_index("ix_pins_longitude", "pins", ["longitude"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_pins_longitude", table_name="pins")
    op.drop_index("ix_pins_latitude", table_name="pins")
    op.drop_table("pins")
