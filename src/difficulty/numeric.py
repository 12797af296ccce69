"""
Numeric helpers shared by the scoring components.

JavaScript-style half-up rounding is used everywhere a value is rounded so that
scores and levels match what the web client displays.
"""

from __future__ import annotations

import math

# Upper bound for streak and failure counts; anything larger scores the same
COUNT_LIMIT = 1_000_000


def is_number(value: object) -> bool:
    """True for finite ints/floats (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, int):
        return True
    return math.isfinite(value)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with ties going towards +infinity (same as Math.round)."""
    factor = 10**digits
    return round(math.floor(value * factor + 0.5) / factor, digits)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def sanitize_count(value: object, limit: int = COUNT_LIMIT) -> int:
    """Coerce a streak/failure count to an int in [0, limit]; NaN, -inf and negatives become 0, +inf becomes limit."""
    if isinstance(value, float) and value == math.inf:
        return limit
    if not is_number(value):
        return 0
    return min(max(0, int(value)), limit)


def positive_or_none(value: object) -> float | None:
    """Return value as float if it is a finite number > 0, else None."""
    if is_number(value) and value > 0:
        return float(value)
    return None
