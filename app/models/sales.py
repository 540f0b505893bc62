# models/sales.py

from sqlalchemy import Column, Integer, DateTime, ForeignKey, Numeric
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.database import Base


class Sale(Base):
    __tablename__ = "sales"

    sale_id = Column(Integer, primary_key=True, index=True)

    machine_id = Column(Integer, ForeignKey("machines.machine_id"), nullable=True, index=True)

    total_amount = Column(Numeric(10, 2), nullable=False)

    sale_time = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    items = relationship("SaleItem", back_populates="sale")
