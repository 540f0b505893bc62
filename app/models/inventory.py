# app/models/inventory.py

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, UniqueConstraint

from app.database import Base

# 32-bit INTEGER on MySQL/PostgreSQL
MAX_QTY = 2_147_483_647


class Inventory(Base):
    __tablename__ = "inventory"

    inv_id = Column(Integer, primary_key=True, index=True)
    machine_id = Column(Integer, ForeignKey("machines.machine_id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    qty = Column(Integer, nullable=False, default=0)
    last_restock = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        # One ledger row per (machine, product); restock upserts against it
        UniqueConstraint("machine_id", "product_id", name="uq_inventory_machine_product"),
        CheckConstraint("qty >= 0", name="ck_inventory_qty_non_negative"),
        CheckConstraint(f"qty <= {MAX_QTY}", name="ck_inventory_qty_max"),
    )
