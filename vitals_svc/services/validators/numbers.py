"""
Numeric coercion for values that arrive as JSON numbers.

JSON has a single number type, so ``5000`` and ``5000.0`` are the same
value to a client. These helpers accept either spelling and return None
for anything that is not a usable number; callers turn None into a
ValidationError with their own message.
"""
import math
from typing import Any, Optional


def as_whole_number(value: Any) -> Optional[int]:
    """
    Return ``value`` as an int if it is an integer or an integral float.

    >>> as_whole_number(5000.0)
    5000
    >>> as_whole_number(10.5) is None
    True
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def as_finite_number(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or None (bools and huge ints included)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None
