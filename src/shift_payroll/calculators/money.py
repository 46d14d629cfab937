"""Decimal coercion and cent rounding shared by all calculators."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")
CENTS = Decimal("0.01")
HUNDRED = Decimal("100")


def to_decimal(value: Number | None) -> Decimal:
    """Coerce a plain number into Decimal.

    Floats go through ``str()`` so that ``0.1`` means exactly one tenth.
    ``None`` is treated as zero, matching how missing stored fields are read.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Boolean is not a monetary amount")
    return Decimal(str(value))


def round_to_cents(amount: Decimal) -> Decimal:
    """Round amount to 2 decimal places, half away from zero."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    """Return ``part / whole * 100`` rounded to cents, or 0 when whole is not positive."""
    if whole <= 0:
        return ZERO
    return round_to_cents(part / whole * HUNDRED)
