# app/models/machines.py

from sqlalchemy import Column, Integer, String

from app.database import Base


class Machine(Base):
    __tablename__ = "machines"

    machine_id = Column(Integer, primary_key=True, index=True)
    location = Column(String(255), nullable=False, default="")
    description = Column(String(255), nullable=False, default="")
