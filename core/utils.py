from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction
from typing import Union

Number = Union[int, float, Decimal]

HUNDRED = Decimal(100)


def to_decimal(x: Number) -> Decimal:
    """Decimal from int/float/Decimal; floats go through str() to avoid binary noise."""
    if isinstance(x, Decimal):
        return x
    if isinstance(x, float):
        return Decimal(str(x))
    return Decimal(x)


def to_cents(x: Number) -> int:
    """Quantize a monetary amount to integer cents, half away from zero."""
    return int(to_decimal(x).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def pct(x: Number) -> Decimal:
    """5 -> Decimal('0.05')"""
    return to_decimal(x) / HUNDRED


def ratio_pct(numerator: int, denominator: int) -> float:
    """Exact numerator/denominator as a percentage; 0.0 when the denominator is 0."""
    if denominator <= 0:
        return 0.0
    return float(Fraction(numerator, denominator) * 100)


def strict_majority(numerator: int, denominator: int) -> bool:
    """numerator / denominator > 1/2, exactly. False when there is nothing to count."""
    return denominator > 0 and 2 * numerator > denominator


def at_least_fraction(numerator: int, denominator: int, fraction: Fraction) -> bool:
    return denominator > 0 and Fraction(numerator, denominator) >= fraction


def format_cents(cents: int) -> str:
    """Display helper: 123456 -> '1,234.56'."""
    sign = "-" if cents < 0 else ""
    whole, frac = divmod(abs(int(cents)), 100)
    return f"{sign}{whole:,}.{frac:02d}"


def coerce_cents(v):
    """pydantic before-validator body: accept ints and integral floats as cents."""
    if isinstance(v, bool):
        raise ValueError("monetary amounts must be integer cents, not bool")
    if isinstance(v, float):
        if not v.is_integer():
            raise ValueError(f"monetary amounts must be integer cents, got {v!r}")
        return int(v)
    if isinstance(v, Decimal):
        if v != v.to_integral_value():
            raise ValueError(f"monetary amounts must be integer cents, got {v!r}")
        return int(v)
    return v
