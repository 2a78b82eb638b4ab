import os
import tempfile

# point the app at a throwaway sqlite file before catalog.config is imported
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(tempfile.gettempdir(), "catalog_test.db")

import pytest

from catalog.db import SessionLocal, init_db
from catalog.models.category import Category, SubCategory
from catalog.models.supplier import Supplier


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    init_db(reset=True)
    db = SessionLocal()
    try:
        hardware = Category(name="Hardware")
        peripherals = Category(name="Peripherals")
        db.add_all([hardware, peripherals])
        db.flush()
        db.add_all(
            [
                SubCategory(name="Processors", category_id=hardware.id),
                SubCategory(name="Memory", category_id=hardware.id),
                SubCategory(name="Keyboards", category_id=peripherals.id),
                Supplier(name="Northwind Supply"),
                Supplier(name="Contoso Parts"),
            ]
        )
        db.commit()
    finally:
        db.close()
    yield


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def product_payload():
    """Builder for a valid registration payload; keyword args override fields."""

    def _build(**overrides):
        data = {
            "name": "Mechanical Keyboard",
            "description": "Full size mechanical keyboard",
            "color": "Black",
            "price": "100.00",
            "model": "MK-1",
            "weight": "1.2",
            "height": "4",
            "length": "45",
            "width": "15",
            "manufacturer": "Acme",
            "supplier": "Northwind Supply",
            "sub_category": "Keyboards",
            "main_image": "http://img.local/main.png",
            "images": ["http://img.local/1.png", "http://img.local/2.png"],
            "discount": None,
        }
        data.update(overrides)
        return data

    return _build
