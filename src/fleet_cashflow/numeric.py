"""Numeric helpers shared by the config models and the engine.

Everything here is total: malformed input degrades to a fallback value
instead of raising.
"""

from __future__ import annotations

import math
from typing import Any


def clamp(value: float, lo: float, hi: float) -> float:
    """Bound ``value`` to ``[lo, hi]``."""
    return max(lo, min(hi, value))


def safe_num(value: Any, fallback: float = 0.0) -> float:
    """Coerce ``value`` to a finite float, or return ``fallback``.

    Numbers pass through, strings are parsed (surrounding whitespace is
    ignored).  ``None``, booleans, unparseable text, NaN and ±inf all map
    to ``fallback``.
    """
    if isinstance(value, bool) or value is None:
        return fallback
    if isinstance(value, (int, float)):
        n = float(value)
    else:
        try:
            n = float(str(value).strip())
        except (TypeError, ValueError):
            return fallback
    return n if math.isfinite(n) else fallback


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +inf (14.5 → 15).

    The engine only feeds non-negative values, where this is the same as
    rounding half away from zero.  Python's built-in ``round`` is banker's
    rounding and must not be used for rental days.  The fractional part is
    compared directly because ``floor(value + 0.5)`` rounds the sum first
    and turns 0.49999999999999994 into 1.
    """
    whole = math.floor(value)
    return whole + 1 if value - whole >= 0.5 else whole


def percent(value: float) -> float:
    """Percentage points → fraction (``25`` → ``0.25``)."""
    return value / 100
