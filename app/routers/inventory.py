# app/routers/inventory.py

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.rate_limiter import limiter
from app.database import get_db
from app.schemas.inventory import (
    DistributeResponse,
    InventoryDistribute,
    InventoryRemove,
    InventoryResponse,
    InventoryRestock,
    InventoryUpdate,
    OkResponse,
)
from app.services import ledger

router = APIRouter(
    prefix="/api/inventory",
    tags=["Inventory"],
)


@router.get("/{machine_id}", response_model=list[InventoryResponse])
def list_inventory(
    machine_id: int,
    db: Session = Depends(get_db),
):
    return ledger.list_for_machine(db, machine_id)


@router.post("", response_model=OkResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.RESTOCK_RATE_LIMIT)
def restock_inventory(
    request: Request,
    inventory_data: InventoryRestock,
    db: Session = Depends(get_db),
):
    ledger.restock(
        db,
        inventory_data.machine_id,
        inventory_data.product_id,
        inventory_data.qty,
    )

    return {"ok": True}


@router.post("/distribute", response_model=DistributeResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.RESTOCK_RATE_LIMIT)
def distribute_inventory(
    request: Request,
    distribute_data: InventoryDistribute,
    db: Session = Depends(get_db),
):
    allocations = ledger.distribute(
        db,
        distribute_data.product_id,
        distribute_data.total_qty,
    )

    return {"ok": True, "allocations": allocations}


@router.put("/{inv_id}", response_model=InventoryResponse)
def update_inventory(
    inv_id: int,
    inventory_data: InventoryUpdate,
    db: Session = Depends(get_db),
):
    return ledger.set_quantity(db, inv_id, inventory_data.qty)


@router.post("/{inv_id}/remove", response_model=InventoryResponse)
def remove_inventory_stock(
    inv_id: int,
    remove_data: InventoryRemove,
    db: Session = Depends(get_db),
):
    return ledger.remove(db, inv_id, ledger.RemoveMode.DECREMENT, remove_data.amount)


@router.delete("/{inv_id}", response_model=OkResponse)
def delete_inventory(
    inv_id: int,
    db: Session = Depends(get_db),
):
    ledger.remove(db, inv_id, ledger.RemoveMode.DELETE)

    return {"ok": True}
