"""Create devices table.

Revision ID: 001_create_devices
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_create_devices"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "devices",
        sa.Column("id", sa.BigInteger, sa.Identity(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("brand", sa.String(255), nullable=False),
        sa.Column("state", sa.String(20), nullable=False),
        sa.Column(
            "creation_time", sa.DateTime(timezone=True),
            nullable=False, server_default=sa.func.now(),
        ),
        sa.CheckConstraint(
            "state IN ('AVAILABLE', 'IN_USE', 'INACTIVE')",
            name="ck_devices_state",
        ),
    )
    op.create_index(
        "ix_devices_brand_lower", "devices", [sa.text("lower(brand)")],
    )
    op.create_index("ix_devices_state", "devices", ["state"])


def downgrade() -> None:
    op.drop_index("ix_devices_state", table_name="devices")
    op.drop_index("ix_devices_brand_lower", table_name="devices")
    op.drop_table("devices")
