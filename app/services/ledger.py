# =========================================================
# INVENTORY LEDGER
#
# One row per (machine, product). Restock is an atomic
# additive upsert executed by the database; direct sets and
# decrements are absolute overwrites (last writer wins).
# =========================================================

import logging
from datetime import datetime, timezone
from enum import Enum

from fastapi import HTTPException, status
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.orm import Session

from app.models.inventory import MAX_QTY, Inventory
from app.models.machines import Machine
from app.models.products import Product

logger = logging.getLogger("app.ledger")


class RemoveMode(str, Enum):
    DELETE = "delete"
    DECREMENT = "decrement"


# =========================================================
# HELPERS
# =========================================================
def _upsert_statement(dialect_name: str, values: dict):
    """Build INSERT ... ON CONFLICT that adds to the stored qty."""

    if dialect_name in ("mysql", "mariadb"):
        stmt = mysql.insert(Inventory).values(**values)
        return stmt.on_duplicate_key_update(
            qty=Inventory.qty + stmt.inserted.qty,
            last_restock=stmt.inserted.last_restock,
        )

    # Dialect support is checked once when the engine is built
    insert = postgresql.insert if dialect_name == "postgresql" else sqlite.insert
    stmt = insert(Inventory).values(**values)

    return stmt.on_conflict_do_update(
        index_elements=["machine_id", "product_id"],
        set_={
            "qty": Inventory.qty + stmt.excluded.qty,
            "last_restock": stmt.excluded.last_restock,
        },
    )


def _apply_restock(db: Session, machine_id: int, product_id: int, delta_qty: int, now: datetime):
    stmt = _upsert_statement(
        db.get_bind().dialect.name,
        {
            "machine_id": machine_id,
            "product_id": product_id,
            "qty": delta_qty,
            "last_restock": now,
        },
    )
    db.execute(stmt)


def _reject_constraint_violation(db: Session, exc: IntegrityError | DataError, action: str):
    db.rollback()
    logger.warning("%s rejected by store: %s", action, exc.orig)
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=str(exc.orig),
    )


def _joined_query(db: Session):
    return (
        db.query(
            Inventory.inv_id,
            Inventory.machine_id,
            Inventory.product_id,
            Product.name.label("product_name"),
            Product.price,
            Inventory.qty,
        )
        .select_from(Inventory)
        .join(Product, Product.id == Inventory.product_id)
    )


def _row_to_dict(row) -> dict:
    data = row._asdict()
    data["price"] = float(data["price"] or 0)
    data["qty"] = int(data["qty"] or 0)
    return data


def split_evenly(total_qty: int, slots: int) -> list[int]:
    """Shares of total_qty over slots; the first total_qty % slots get one extra."""
    base, remainder = divmod(total_qty, slots)
    return [base + 1 if index < remainder else base for index in range(slots)]


# =========================================================
# READS
# =========================================================
def get_record(db: Session, inv_id: int) -> dict | None:
    row = _joined_query(db).filter(Inventory.inv_id == inv_id).first()
    return _row_to_dict(row) if row else None


def list_for_machine(db: Session, machine_id: int) -> list[dict]:
    rows = (
        _joined_query(db)
        .filter(Inventory.machine_id == machine_id)
        .order_by(Product.name)
        .all()
    )
    return [_row_to_dict(row) for row in rows]


# =========================================================
# RESTOCK (ATOMIC ADDITIVE UPSERT)
# =========================================================
def restock(
    db: Session,
    machine_id: int,
    product_id: int,
    delta_qty: int,
    now: datetime | None = None,
) -> None:
    # Decrements go through set_quantity/remove, never a negative restock
    if delta_qty is None or not 0 < delta_qty <= MAX_QTY:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Restock quantity must be between 1 and {MAX_QTY}",
        )

    now = now or datetime.now(timezone.utc)

    try:
        _apply_restock(db, machine_id, product_id, delta_qty, now)
        db.commit()
    except (IntegrityError, DataError) as exc:
        _reject_constraint_violation(db, exc, "Restock")

    logger.info(
        "Restocked machine %s product %s by %s",
        machine_id,
        product_id,
        delta_qty,
    )


def distribute(db: Session, product_id: int, total_qty: int, now: datetime | None = None) -> list[dict]:
    """
    Spread total_qty units of a product over every machine.

    Machines are taken in machine_id order; leftover units go one each
    to the lowest ids. Machines whose share is zero are skipped. All
    upserts commit together or not at all.
    """
    if total_qty is None or not 0 < total_qty <= MAX_QTY:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Total quantity must be between 1 and {MAX_QTY}",
        )

    machine_ids = [
        row.machine_id
        for row in db.query(Machine.machine_id).order_by(Machine.machine_id).all()
    ]

    if not machine_ids:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No machines found",
        )

    now = now or datetime.now(timezone.utc)
    allocations = []

    try:
        for machine_id, share in zip(machine_ids, split_evenly(total_qty, len(machine_ids))):
            if share == 0:
                continue
            _apply_restock(db, machine_id, product_id, share, now)
            allocations.append({"machine_id": machine_id, "qty": share})
        db.commit()
    except (IntegrityError, DataError) as exc:
        _reject_constraint_violation(db, exc, "Distribution")

    logger.info(
        "Distributed %s units of product %s across %s machines",
        total_qty,
        product_id,
        len(allocations),
    )

    return allocations


# =========================================================
# ABSOLUTE UPDATES
# =========================================================
def set_quantity(db: Session, inv_id: int, quantity: int) -> dict:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or not 0 <= quantity <= MAX_QTY:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Quantity must be an integer between 0 and {MAX_QTY}",
        )

    try:
        updated = (
            db.query(Inventory)
            .filter(Inventory.inv_id == inv_id)
            .update({Inventory.qty: quantity}, synchronize_session=False)
        )
        if not updated:
            db.rollback()
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Inventory record not found",
            )
        db.commit()
    except (IntegrityError, DataError) as exc:
        _reject_constraint_violation(db, exc, "Quantity update")

    logger.info("Set inventory %s quantity to %s", inv_id, quantity)

    return get_record(db, inv_id)


def remove(db: Session, inv_id: int, mode: RemoveMode, amount: int | None = None) -> dict | None:
    """
    Remove stock from a ledger row.

    DELETE drops the row entirely and returns None. DECREMENT clamps
    the new quantity at zero, keeps the row, and returns it refreshed.
    """
    if mode == RemoveMode.DELETE:
        deleted = (
            db.query(Inventory)
            .filter(Inventory.inv_id == inv_id)
            .delete(synchronize_session=False)
        )
        if not deleted:
            db.rollback()
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Inventory record not found",
            )
        db.commit()
        logger.info("Deleted inventory %s", inv_id)
        return None

    if amount is None or amount < 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Remove amount must be a non-negative integer",
        )

    current = db.query(Inventory.qty).filter(Inventory.inv_id == inv_id).scalar()

    if current is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Inventory record not found",
        )

    return set_quantity(db, inv_id, max(0, current - amount))
