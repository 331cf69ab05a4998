"""Coercion of raw form values into numbers.

Responses and measurements arrive from form inputs and stored documents, so a
rating may be ``4``, ``"4"`` or ``""``. Anything that is not a finite number is
treated as "not assessed".
"""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Optional

TWO_PLACES = Decimal("0.01")


def to_decimal(value: Any) -> Optional[Decimal]:
    """Parse a raw value into a Decimal, or None when it carries no number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float)):
        number = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    if not number.is_finite():
        return None
    return number


def to_number(value: Any) -> Optional[float]:
    number = to_decimal(value)
    if number is None:
        return None
    # finite Decimals beyond the float range overflow to inf
    converted = float(number)
    return converted if math.isfinite(converted) else None


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def quantize_2(value: Decimal | float) -> Decimal:
    """Fix a value to exactly two decimal places."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    if not value.is_finite():
        return value
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def whole_or_float(value: Decimal) -> int | float:
    if value == value.to_integral_value():
        return int(value)
    return float(value)
