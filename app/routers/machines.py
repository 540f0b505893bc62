# app/routers/machines.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.machines import Machine
from app.schemas.machine import MachineResponse

router = APIRouter(
    prefix="/api/machines",
    tags=["Machines"],
)


@router.get("", response_model=list[MachineResponse])
def list_machines(db: Session = Depends(get_db)):
    return db.query(Machine).order_by(Machine.machine_id).all()
