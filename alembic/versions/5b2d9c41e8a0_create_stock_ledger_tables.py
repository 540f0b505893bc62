"""create_stock_ledger_tables

Revision ID: 5b2d9c41e8a0
Revises:
Create Date: 2026-10-18 15:10:42.118304
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b2d9c41e8a0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # CATALOG
    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("unit", sa.String(length=32), nullable=False, server_default="pcs"),
        sa.CheckConstraint("price >= 0", name="ck_product_price_non_negative"),
    )
    op.create_index("ix_products_id", "products", ["id"], unique=False)

    op.create_table(
        "machines",
        sa.Column("machine_id", sa.Integer(), primary_key=True),
        sa.Column("location", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("description", sa.String(length=255), nullable=False, server_default=""),
    )
    op.create_index("ix_machines_machine_id", "machines", ["machine_id"], unique=False)

    # INVENTORY LEDGER
    op.create_table(
        "inventory",
        sa.Column("inv_id", sa.Integer(), primary_key=True),
        sa.Column("machine_id", sa.Integer(), sa.ForeignKey("machines.machine_id"), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id"), nullable=False),
        sa.Column("qty", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_restock", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("machine_id", "product_id", name="uq_inventory_machine_product"),
        sa.CheckConstraint("qty >= 0", name="ck_inventory_qty_non_negative"),
        sa.CheckConstraint("qty <= 2147483647", name="ck_inventory_qty_max"),
    )
    op.create_index("ix_inventory_inv_id", "inventory", ["inv_id"], unique=False)
    op.create_index("ix_inventory_machine_id", "inventory", ["machine_id"], unique=False)
    op.create_index("ix_inventory_product_id", "inventory", ["product_id"], unique=False)

    # SALES FACTS
    op.create_table(
        "sales",
        sa.Column("sale_id", sa.Integer(), primary_key=True),
        sa.Column("machine_id", sa.Integer(), sa.ForeignKey("machines.machine_id"), nullable=True),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("sale_time", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_sales_sale_id", "sales", ["sale_id"], unique=False)
    op.create_index("ix_sales_machine_id", "sales", ["machine_id"], unique=False)
    op.create_index("ix_sales_sale_time", "sales", ["sale_time"], unique=False)

    op.create_table(
        "sale_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("sale_id", sa.Integer(), sa.ForeignKey("sales.sale_id"), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id"), nullable=False),
        sa.Column("qty", sa.Integer(), nullable=False),
    )
    op.create_index("ix_sale_items_id", "sale_items", ["id"], unique=False)
    op.create_index("ix_sale_items_sale_id", "sale_items", ["sale_id"], unique=False)
    op.create_index("ix_sale_items_product_id", "sale_items", ["product_id"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index("ix_sale_items_product_id", table_name="sale_items")
    op.drop_index("ix_sale_items_sale_id", table_name="sale_items")
    op.drop_index("ix_sale_items_id", table_name="sale_items")
    op.drop_table("sale_items")
    op.drop_index("ix_sales_sale_time", table_name="sales")
    op.drop_index("ix_sales_machine_id", table_name="sales")
    op.drop_index("ix_sales_sale_id", table_name="sales")
    op.drop_table("sales")
    op.drop_index("ix_inventory_product_id", table_name="inventory")
    op.drop_index("ix_inventory_machine_id", table_name="inventory")
    op.drop_index("ix_inventory_inv_id", table_name="inventory")
    op.drop_table("inventory")
    op.drop_index("ix_machines_machine_id", table_name="machines")
    op.drop_table("machines")
    op.drop_index("ix_products_id", table_name="products")
    op.drop_table("products")
