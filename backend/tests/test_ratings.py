from decimal import Decimal

import pytest

from catalog.exceptions import InvalidRating
from catalog.models.product import Product
from catalog.models.rating import Rating
from catalog.schemas.product_schema import ProductRequest
from catalog.services.product_service import ProductService
from catalog.services.rating_service import RatingService, average_rating, round_to_half


def test_average_exact_half():
    assert average_rating([1.0, 2.0]) == Decimal("1.5")


def test_average_rounds_to_nearest_half():
    # mean 1.6 -> 3.2 -> 3 -> 1.5
    assert average_rating([1.0, 2.2]) == Decimal("1.5")


def test_average_half_up_boundary():
    # mean 1.75 -> 3.5 -> 4 -> 2.0
    assert average_rating([1.5, 2.0]) == Decimal("2.0")


def test_average_empty_is_zero():
    assert average_rating([]) == 0


def test_round_to_half():
    assert round_to_half(2.2) == Decimal("2.0")
    assert round_to_half("4.74") == Decimal("4.5")
    assert round_to_half("4.75") == Decimal("5.0")


@pytest.fixture
def product_id(db, product_payload):
    p = ProductService(db).register(ProductRequest(**product_payload(name="Rated Keyboard")))
    return p.id


@pytest.mark.parametrize("value", [0.5, 0.99, 5.1])
def test_rating_out_of_range_rejected(db, product_id, value):
    with pytest.raises(InvalidRating):
        ProductService(db).rate(product_id, value)


def test_rating_bounds_accepted_and_averaged(db, product_id):
    svc = ProductService(db)
    assert svc.rate(product_id, 1.0) == Decimal("1.0")
    assert svc.rate(product_id, 5.0) == Decimal("3.0")
    view = svc.get_by_id(product_id)
    assert view.rating_count == 2
    assert view.average_rating == Decimal("3.0")


def test_rating_is_rounded_before_storage(db, product_id):
    ProductService(db).rate(product_id, 4.2)
    stored = db.query(Rating.value).filter(Rating.product_id == product_id).all()
    assert [row[0] for row in stored] == [Decimal("4.0")]


def test_resync_restores_stale_averages(db, product_id):
    ProductService(db).rate(product_id, 3.5)
    p = db.get(Product, product_id)
    p.average_rating = None
    db.commit()

    assert RatingService(db).resync_all() >= 1
    db.expire_all()
    assert db.get(Product, product_id).average_rating == Decimal("3.5")
