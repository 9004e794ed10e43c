"""Safe numeric helpers for chart arithmetic.

Stat values come from upstream feeds and may be None, NaN or strings; these
helpers make sure a bad value degrades to a neutral number instead of breaking
the wheel.
"""

from __future__ import annotations

import numpy as np
from typing import Optional, Union

Number = Union[float, int, np.floating]


def safe_float(value: Optional[Union[Number, str]], default: float = 0.0) -> float:
    """Convert to float; return default if None, NaN, infinite or invalid."""
    if value is None:
        return default
    if isinstance(value, float) and np.isnan(value):
        return default
    try:
        v = float(value)
        return v if np.isfinite(v) else default
    except (TypeError, ValueError):
        return default


def safe_divide(num: Number, denom: Number, default: float = 0.0) -> float:
    """Return num/denom, or default when either side is missing or denom is 0."""
    d = safe_float(denom, default=0.0)
    if d == 0:
        return default
    return safe_float(num) / d


def clamp(value: Number, low: Number, high: Number) -> Number:
    """Clamp value to [low, high]. NaN and None clamp to low."""
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return low
    return max(low, min(high, value))


def is_missing(value) -> bool:
    """True for None and NaN, the values rendered as '--'."""
    if value is None:
        return True
    try:
        return bool(np.isnan(value))
    except (TypeError, ValueError):
        return False
