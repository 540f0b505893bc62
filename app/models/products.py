# app/models/products.py

from sqlalchemy import CheckConstraint, Column, Integer, String, Numeric

from app.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    unit = Column(String(32), nullable=False, default="pcs")

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_product_price_non_negative"),
    )
