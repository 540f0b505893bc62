# =========================================================
# DASHBOARD METRICS AGGREGATOR
#
# Read-only. Every call recomputes from current state with
# separate queries; no snapshot isolation is attempted.
#
# Schema-safe: numeric outputs are never None
# =========================================================

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.inventory import Inventory
from app.models.machines import Machine
from app.models.products import Product
from app.models.sale_items import SaleItem
from app.models.sales import Sale


def _as_int(value) -> int:
    return int(value or 0)


def _as_float(value) -> float:
    return float(value or 0)


@dataclass(frozen=True)
class StockTotals:
    total_products: int
    total_machines: int
    total_stock_quantity: int
    total_stock_value: float


# =========================================================
# CANONICAL TOTALS
# =========================================================
def stock_totals(db: Session) -> StockTotals:
    total_products = db.query(func.count(Product.id)).scalar()

    total_machines = db.query(func.count(Machine.machine_id)).scalar()

    total_stock_quantity = db.query(
        func.coalesce(func.sum(Inventory.qty), 0)
    ).scalar()

    total_stock_value = (
        db.query(func.coalesce(func.sum(Inventory.qty * Product.price), 0))
        .select_from(Inventory)
        .join(Product, Product.id == Inventory.product_id)
        .scalar()
    )

    return StockTotals(
        total_products=_as_int(total_products),
        total_machines=_as_int(total_machines),
        total_stock_quantity=_as_int(total_stock_quantity),
        total_stock_value=_as_float(total_stock_value),
    )


def sales_totals(db: Session) -> tuple[float, int]:
    total_revenue = db.query(
        func.coalesce(func.sum(Sale.total_amount), 0)
    ).scalar()

    total_sales_count = db.query(func.count(Sale.sale_id)).scalar()

    return _as_float(total_revenue), _as_int(total_sales_count)


# =========================================================
# TOP SELLERS
# =========================================================
def top_selling_products(db: Session, limit: int) -> list[dict]:
    total_sales = func.coalesce(func.sum(SaleItem.qty), 0)

    rows = (
        db.query(
            Product.name.label("product_name"),
            total_sales.label("total_sales"),
        )
        .select_from(SaleItem)
        .join(Product, Product.id == SaleItem.product_id)
        .group_by(SaleItem.product_id, Product.name)
        .having(total_sales > 0)
        .order_by(total_sales.desc())
        .limit(limit)
        .all()
    )

    return [
        {"product_name": row.product_name, "total_sales": _as_int(row.total_sales)}
        for row in rows
    ]


# =========================================================
# REVENUE TREND (SPARSE DAILY SERIES)
# =========================================================
def store_today(db: Session) -> date:
    """Current date on the database clock (sales are stamped by the store)."""
    value = db.query(func.current_date()).scalar()
    # SQLite returns text
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    return value


def revenue_trend(db: Session, days: int = 7, today: date | None = None) -> list[dict]:
    today = today or store_today(db)
    cutoff = datetime.combine(today - timedelta(days=days), datetime.min.time())

    sale_date = func.date(Sale.sale_time)

    rows = (
        db.query(
            sale_date.label("date"),
            func.coalesce(func.sum(Sale.total_amount), 0).label("revenue"),
        )
        .filter(Sale.sale_time >= cutoff)
        .group_by(sale_date)
        .order_by(sale_date.asc())
        .all()
    )

    # date() comes back as a date on MySQL/PostgreSQL and as text on SQLite
    return [
        {"date": str(row.date)[:10], "revenue": _as_float(row.revenue)}
        for row in rows
    ]


# =========================================================
# PER-MACHINE DISTRIBUTION
# =========================================================
def machine_display_name(machine_id: int, location: str | None, description: str | None) -> str:
    if location:
        return location
    if description:
        return description
    return f"Machine {machine_id}"


def machine_distribution(db: Session) -> list[dict]:
    total_qty = func.coalesce(func.sum(Inventory.qty), 0)
    total_value = func.coalesce(func.sum(Inventory.qty * Product.price), 0)

    rows = (
        db.query(
            Machine.machine_id,
            Machine.location,
            Machine.description,
            total_qty.label("total_qty"),
            total_value.label("total_value"),
        )
        .select_from(Machine)
        .outerjoin(Inventory, Inventory.machine_id == Machine.machine_id)
        .outerjoin(Product, Product.id == Inventory.product_id)
        .group_by(Machine.machine_id, Machine.location, Machine.description)
        .order_by(total_qty.desc(), Machine.machine_id.asc())
        .all()
    )

    return [
        {
            "machine_id": row.machine_id,
            "machine_name": machine_display_name(row.machine_id, row.location, row.description),
            "total_qty": _as_int(row.total_qty),
            "total_value": _as_float(row.total_value),
        }
        for row in rows
    ]


# =========================================================
# PRESENTATION VIEWS
# =========================================================
def dashboard_metrics(db: Session, top_limit: int) -> dict:
    totals = stock_totals(db)
    total_revenue, total_sales_count = sales_totals(db)

    return {
        "total_products": totals.total_products,
        "total_machines": totals.total_machines,
        "total_stock_quantity": totals.total_stock_quantity,
        "total_stock_value": totals.total_stock_value,
        "total_revenue": total_revenue,
        "total_sales_count": total_sales_count,
        "top_selling_products": top_selling_products(db, top_limit),
    }


def compat_metrics(db: Session) -> dict:
    totals = stock_totals(db)

    return {
        "totalProducts": totals.total_products,
        "activeMachines": totals.total_machines,
        "itemsInStock": totals.total_stock_quantity,
        "stockValue": totals.total_stock_value,
    }
