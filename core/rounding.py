"""Rounding used for every calorie value the planner produces."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (1832.5 -> 1833).

    The built-in `round` uses banker's rounding and would give 1832.
    """
    return int(math.floor(value + 0.5))
