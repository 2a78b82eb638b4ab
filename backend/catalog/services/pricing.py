"""
Discounted-price arithmetic.

Prices are ``Decimal`` quantized to cents with ROUND_HALF_UP. Discount
percentages may be passed as the stored text value ("10") or as a number.
The "0" discount is the no-discount sentinel: both functions return the
input unchanged (apart from quantization).
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from catalog.exceptions import InvalidDiscount
from catalog.utils.validation import to_decimal

CENTS = Decimal("0.01")
HUNDRED = Decimal(100)

Amount = Union[int, float, str, Decimal]


def quantize_price(value: Amount) -> Decimal:
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def _percent(discount_percent: Amount) -> Decimal:
    try:
        pct = to_decimal(discount_percent)
    except ValueError:
        raise InvalidDiscount()
    if pct < 0 or pct >= HUNDRED:
        raise InvalidDiscount()
    return pct


def apply_discount(base_price: Amount, discount_percent: Amount) -> Decimal:
    """base * (100 - pct) / 100, rounded half-up to cents."""
    pct = _percent(discount_percent)
    base = to_decimal(base_price)
    if pct == 0:
        return quantize_price(base)
    return quantize_price(base * (HUNDRED - pct) / HUNDRED)


def recover_base_price(current_price: Amount, discount_percent: Amount) -> Decimal:
    """Inverse of apply_discount: current * 100 / (100 - pct), rounded half-up."""
    pct = _percent(discount_percent)
    current = to_decimal(current_price)
    if pct == 0:
        return quantize_price(current)
    return quantize_price(current * HUNDRED / (HUNDRED - pct))
