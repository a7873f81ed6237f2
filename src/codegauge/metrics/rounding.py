"""Half-up rounding.

The published scores round halves away from zero for positive values
(12.5 -> 13); Python's ``round`` rounds halves to even.
"""

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to ``digits`` decimals, halves upward."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    """Round to the nearest integer, halves upward."""
    return int(math.floor(value + 0.5))
