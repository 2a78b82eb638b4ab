from decimal import Decimal

import pytest

from catalog.db import SessionLocal
from catalog.models.product import Product
from catalog.schemas.product_schema import ProductFilter, ProductRequest
from catalog.services.filters import build_filter, price_bounds
from catalog.services.product_service import ProductService


def test_no_filters_builds_no_criteria():
    plan = build_filter(ProductFilter())
    assert plan.criteria == []
    assert plan.applied == []
    assert (plan.page, plan.size) == (0, 10)


def test_pagination_defaults_for_non_positive_values():
    plan = build_filter(ProductFilter(page=-1, size=0))
    assert (plan.page, plan.size) == (0, 10)
    plan = build_filter(ProductFilter(page=2, size=5))
    assert (plan.page, plan.size) == (2, 5)


def test_blank_inputs_are_skipped():
    plan = build_filter(ProductFilter(name="  ", category="", manufacturer=None))
    assert plan.applied == []


def test_steps_keep_fixed_order():
    plan = build_filter(
        ProductFilter(
            rating=3,
            max_price=100,
            manufacturer="Acme",
            sub_category="Keyboards",
            category="Peripherals",
            name="key",
        )
    )
    assert plan.applied == ["name", "category", "sub_category", "manufacturer", "price", "rating"]


def test_price_bounds_quirk():
    assert price_bounds(ProductFilter(min_price=10, max_price=20)) == (10, 20)
    assert price_bounds(ProductFilter(max_price=100)) == (0, 100)
    # a lone minimum does not filter at all
    assert price_bounds(ProductFilter(min_price=50)) is None
    assert "price" not in build_filter(ProductFilter(min_price=50)).applied


@pytest.fixture(scope="module")
def priced_products(setup_db):
    db = SessionLocal()
    svc = ProductService(db)
    base = dict(
        description="Filter test product",
        color="Grey",
        model="FT-1",
        weight="1",
        height="1",
        length="1",
        width="1",
        manufacturer="PriceCo",
        supplier="Contoso Parts",
        main_image="http://img.local/f.png",
        images=[],
    )
    try:
        ids = {}
        for name, price, sub in [
            ("Budget Memory", "20.00", "Memory"),
            ("Midrange Memory", "60.00", "Memory"),
            ("Flagship Processor", "150.00", "Processors"),
        ]:
            p = svc.register(ProductRequest(name=name, price=price, sub_category=sub, **base))
            ids[name] = p.id
        svc.rate(ids["Flagship Processor"], 4.5)
        svc.rate(ids["Budget Memory"], 2.0)
        yield ids
    finally:
        db.close()


def _names(db, **kwargs):
    return sorted(v.name for v in ProductService(db).search(ProductFilter(manufacturer="PriceCo", **kwargs)))


def test_only_max_equals_zero_to_max(db, priced_products):
    assert _names(db, max_price=100) == _names(db, min_price=0, max_price=100)
    assert _names(db, max_price=100) == ["Budget Memory", "Midrange Memory"]


def test_only_min_applies_no_price_filter(db, priced_products):
    assert _names(db, min_price=50) == ["Budget Memory", "Flagship Processor", "Midrange Memory"]


def test_price_between(db, priced_products):
    assert _names(db, min_price=50, max_price=200) == ["Flagship Processor", "Midrange Memory"]


def test_category_and_sub_category(db, priced_products):
    assert _names(db, category="Hardware") == ["Budget Memory", "Flagship Processor", "Midrange Memory"]
    assert _names(db, sub_category="Processors") == ["Flagship Processor"]
    assert _names(db, category="Peripherals") == []


def test_name_matches_name_or_description_case_insensitive(db, priced_products):
    assert _names(db, name="MEMORY") == ["Budget Memory", "Midrange Memory"]
    assert len(_names(db, name="filter TEST")) == 3


def test_rating_threshold(db, priced_products):
    assert _names(db, rating=4) == ["Flagship Processor"]
    assert _names(db, rating=2) == ["Budget Memory", "Flagship Processor"]


def test_no_filters_returns_everything_paginated(db, priced_products):
    total = db.query(Product).count()
    everything = ProductService(db).search(ProductFilter(size=1000))
    assert len(everything) == total
    first_page = ProductService(db).search(ProductFilter())
    assert len(first_page) == min(total, 10)


def test_search_pages_are_disjoint(db, priced_products):
    svc = ProductService(db)
    first = [v.id for v in svc.search(ProductFilter(manufacturer="PriceCo", size=2))]
    second = [v.id for v in svc.search(ProductFilter(manufacturer="PriceCo", size=2, page=1))]
    assert len(first) == 2 and len(second) == 1
    assert not set(first) & set(second)


def test_search_view_prices(db, priced_products):
    views = ProductService(db).search(ProductFilter(manufacturer="PriceCo", sub_category="Processors"))
    assert views[0].price == Decimal("150.00")
    assert views[0].supplier == "Contoso Parts"
    assert views[0].category == "Hardware"


def test_padded_inputs_are_trimmed(db, priced_products):
    assert _names(db, category=" Hardware ") == ["Budget Memory", "Flagship Processor", "Midrange Memory"]
    assert _names(db, sub_category="Processors ") == ["Flagship Processor"]
    padded = ProductService(db).search(ProductFilter(manufacturer="  PriceCo "))
    assert len(padded) == 3
