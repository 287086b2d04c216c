"""Whole-dollar rounding shared by the tax functions."""

import math


def round_to_dollar(amount: float) -> int:
    """Round to the nearest whole dollar, halves rounding up.

    Examples: 1172.5 -> 1173, 6051.2 -> 6051. Non-finite amounts
    (inf, nan) round to 0.
    """
    if not math.isfinite(amount):
        return 0
    return int(math.floor(amount + 0.5))
