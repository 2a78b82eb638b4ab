"""
Stateless field checks shared by the product service.

Each helper raises ``ValidationError(code, message)`` on the first problem it
finds and returns the normalised value otherwise.
"""
from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence, Union

from catalog.exceptions import FieldCode, ValidationError

Number = Union[int, float, str, Decimal]


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def to_decimal(value: Optional[Number]) -> Optional[Decimal]:
    """Convert ints/floats/strings to Decimal without binary float noise."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Not a number: {value!r}")


def check_text(value: Optional[str], code: FieldCode, label: str, min_len: int, max_len: int) -> str:
    if is_blank(value):
        raise ValidationError(code, f"The {label} field is required!")
    return check_length(value, code, label, min_len, max_len)


def check_length(value: str, code: FieldCode, label: str, min_len: int, max_len: int) -> str:
    if len(value) < min_len or len(value) > max_len:
        raise ValidationError(
            code, f"The {label} field must contain between {min_len} and {max_len} characters!"
        )
    return value


def check_number(
    value: Optional[Number],
    code: FieldCode,
    label: str,
    minimum: Number,
    maximum: Number,
    unit: str = "",
) -> Decimal:
    if value is None:
        raise ValidationError(code, f"The {label} field is required!")
    return check_range(value, code, label, minimum, maximum, unit)


def check_range(
    value: Number, code: FieldCode, label: str, minimum: Number, maximum: Number, unit: str = ""
) -> Decimal:
    try:
        number = to_decimal(value)
    except ValueError:
        raise ValidationError(code, f"The {label} field must be a number!")
    if number < to_decimal(minimum) or number > to_decimal(maximum):
        raise ValidationError(
            code, f"The {label} field must be between {minimum} and {maximum}{unit}!"
        )
    return number


def check_list(values: Optional[Sequence[str]], code: FieldCode, label: str) -> list:
    if values is None:
        raise ValidationError(code, f"The {label} field is required!")
    return [v for v in values if not is_blank(v)]
