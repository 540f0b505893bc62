"""
Pytest fixtures for the vending stock API.

Points DATABASE_URL at a throwaway SQLite file before the app is
imported, rebuilds the schema for every test and exposes factories
for catalog rows and sales facts.
"""

import os
import tempfile
from datetime import datetime, timezone
from decimal import Decimal

_test_db_file = tempfile.NamedTemporaryFile(suffix=".sqlite", delete=False)
_test_db_file.close()
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_file.name}"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient

from app.database import Base, SessionLocal, engine
from app.main import app
from app.models.inventory import Inventory
from app.models.machines import Machine
from app.models.products import Product
from app.models.sale_items import SaleItem
from app.models.sales import Sale


@pytest.fixture(scope="session", autouse=True)
def _cleanup_db_file():
    yield
    engine.dispose()
    os.unlink(_test_db_file.name)


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_product(db):
    def _make(name="Cola", price="1.50", unit="pcs"):
        product = Product(name=name, price=Decimal(price), unit=unit)
        db.add(product)
        db.commit()
        return product.id

    return _make


@pytest.fixture
def make_machine(db):
    def _make(location="", description=""):
        machine = Machine(location=location, description=description)
        db.add(machine)
        db.commit()
        return machine.machine_id

    return _make


@pytest.fixture
def make_inventory(db):
    def _make(machine_id, product_id, qty):
        record = Inventory(machine_id=machine_id, product_id=product_id, qty=qty)
        db.add(record)
        db.commit()
        return record.inv_id

    return _make


@pytest.fixture
def make_sale(db):
    """Insert a sale with (product_id, qty) line items at sale_time."""

    def _make(total_amount, sale_time=None, items=(), machine_id=None):
        sale = Sale(
            machine_id=machine_id,
            total_amount=Decimal(str(total_amount)),
            sale_time=sale_time or datetime.now(timezone.utc).replace(tzinfo=None),
        )
        db.add(sale)
        db.flush()
        for product_id, qty in items:
            db.add(SaleItem(sale_id=sale.sale_id, product_id=product_id, qty=qty))
        db.commit()
        return sale.sale_id

    return _make
