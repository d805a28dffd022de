"""Create inventory_item.

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "inventory_item",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("supplier_id", sa.String(length=255), nullable=False),
        sa.Column("catalog_entry_id", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price", sa.String(length=32), nullable=False),
        sa.Column("expiry_date", sa.Date(), nullable=True),
        sa.Column("delivery_regions", sa.String(), nullable=False),
        sa.Column("imported_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_inventory_item"),
    )
    op.create_index("ix_inventory_item_supplier_id", "inventory_item", ["supplier_id"])


def downgrade() -> None:
    op.drop_index("ix_inventory_item_supplier_id", table_name="inventory_item")
    op.drop_table("inventory_item")
