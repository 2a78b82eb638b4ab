from decimal import Decimal

import pytest

from catalog.exceptions import InvalidDiscount
from catalog.services.pricing import apply_discount, recover_base_price


def test_apply_discount_basic():
    assert apply_discount(Decimal("100.00"), "10") == Decimal("90.00")
    assert apply_discount("59.90", 25) == Decimal("44.93")


def test_zero_discount_is_identity():
    for price in ["0.00", "1.99", "100.00", "99999999.99"]:
        assert apply_discount(price, "0") == Decimal(price)
        assert recover_base_price(price, "0") == Decimal(price)


def test_rounding_is_half_up():
    # 0.25 * 0.5 = 0.125 -> 0.13 (half-even would give 0.12)
    assert apply_discount("0.25", "50") == Decimal("0.13")
    assert apply_discount("0.05", "10") == Decimal("0.05")


@pytest.mark.parametrize("price", ["100.00", "19.99", "1234.56", "0.00"])
@pytest.mark.parametrize("pct", ["0", "10", "25", "50"])
def test_recover_inverts_apply(price, pct):
    recovered = recover_base_price(apply_discount(price, pct), pct)
    assert abs(recovered - Decimal(price)) <= Decimal("0.01")


def test_recover_base_price():
    assert recover_base_price("90.00", "10") == Decimal("100.00")


@pytest.mark.parametrize("pct", ["100", "-5", "abc"])
def test_bad_percentages_rejected(pct):
    with pytest.raises(InvalidDiscount):
        apply_discount("10.00", pct)
