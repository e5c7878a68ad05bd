"""Rounding helpers shared by the scoring and report modules.

All rounding is ROUND_HALF_UP on the exact binary value of the float, so
band edges behave like the published examples (62.5 -> 63). Python's round()
would round half to even (round(62.5) == 62).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round to ndigits decimals, halves away from zero."""
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def round_int(value: float) -> int:
    """round_half_up to the nearest integer."""
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
