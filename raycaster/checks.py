"""
Argument checks shared by the grid, caster and motion code.
"""

from __future__ import annotations
import math
import numbers


def require_real(name: str, value: object) -> float:
    """Return value as float, raising TypeError/ValueError for bad input."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError(f"{name} must be a real number, got {type(value).__name__}")
    result = float(value)
    if not math.isfinite(result):
        raise ValueError(f"{name} must be finite, got {result}")
    return result


def is_integral(value: float, eps: float) -> bool:
    """True if value lies within eps of an integer."""
    return abs(value - round(value)) <= eps
