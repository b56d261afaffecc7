"""
FFXIV Stat Calculator - Decimal Arithmetic
==========================================
Every stat formula runs on exact decimals under one shared context.

Division is the only inexact operation in the formulas; it keeps
DECIMAL_PRECISION significant digits and rounds half up. Floors and
truncations are always explicit.
"""

from decimal import Context, Decimal, ROUND_DOWN, ROUND_FLOOR, localcontext
from typing import Union

from .constants import DECIMAL_PRECISION, DECIMAL_ROUNDING

DecimalLike = Union[Decimal, int, str]

ENGINE_CONTEXT = Context(prec=DECIMAL_PRECISION, rounding=DECIMAL_ROUNDING)

ZERO = Decimal(0)
ONE = Decimal(1)
THOUSAND = Decimal(1000)


def engine_context():
    """Context manager that switches to the engine's decimal context."""
    return localcontext(ENGINE_CONTEXT)


def to_decimal(value: DecimalLike) -> Decimal:
    """
    Convert an int, string or Decimal to Decimal.

    Floats are rejected: they would bring binary rounding error into
    formulas that must be exact.
    """
    if isinstance(value, float):
        raise TypeError(f"use a string or int instead of float: {value!r}")
    if isinstance(value, Decimal):
        return value
    return Decimal(value)


def floor_decimal(value: Decimal) -> Decimal:
    """Round toward negative infinity (floor(-0.5) is -1, not 0)."""
    return value.to_integral_value(rounding=ROUND_FLOOR)


def round_down(value: Decimal, places: int) -> Decimal:
    """
    Truncate to `places` decimal places, toward zero.

    Values that already fit are returned untouched, so 2.5 stays 2.5
    rather than becoming 2.50.
    """
    if value.as_tuple().exponent >= -places:
        return value
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_DOWN)
