"""
Numeric value helpers.

Amounts and percentages are ``Decimal`` throughout the analytics layer.
Rows from the data store may carry ``int``, ``float`` or numeric strings;
``to_decimal`` converts through ``str`` so a float such as ``0.1`` does
not drag its binary expansion into a report total.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

ZERO = Decimal("0")
HUNDRED = Decimal("100")

Number = Decimal | int | float | str


def to_decimal(value: Number | None) -> Decimal:
    """Convert a numeric value to Decimal; None becomes zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value: Decimal, places: int = 2) -> Decimal:
    """Round half away from zero to ``places`` decimal places."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
