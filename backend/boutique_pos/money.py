# Overview: Decimal helpers for prices, totals and cash handling.

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def parse_amount(value) -> Decimal:
    """
    Coerce int/str/Decimal (or float, via its repr) to an exact Decimal.

    Raises ValueError for anything that is not a finite number.
    """
    if isinstance(value, bool):
        raise ValueError("amount must be a number")
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(str(value).strip()) if isinstance(value, str) else Decimal(value)
    except (InvalidOperation, TypeError):
        raise ValueError("amount must be a number")
    if not amount.is_finite():
        raise ValueError("amount must be a finite number")
    return amount


def to_money(value) -> Decimal:
    """Like parse_amount(), quantized to cents."""
    return parse_amount(value).quantize(CENT, rounding=ROUND_HALF_UP)


def money_str(value: Decimal) -> str:
    """Serialize money for storage and export ("49.99")."""
    return str(value.quantize(CENT, rounding=ROUND_HALF_UP))
