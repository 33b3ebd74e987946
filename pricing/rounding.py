"""Cent rounding shared by every component that emits money values."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

_CENT = Decimal("0.01")


def round2(value: float) -> float:
    """Round to 2 decimal places, halves away from zero.

    Goes through the shortest decimal repr of the float so that inputs
    like 1.005 round to 1.01 rather than falling victim to binary error.
    Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    return float(Decimal(repr(float(value))).quantize(_CENT, rounding=ROUND_HALF_UP))
