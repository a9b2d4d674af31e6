"""Sanitation helpers for untrusted values coming from the remote source.

Every helper here returns a usable value and never raises. Values reported by
the machine (totals, flags, offsets) pass through these functions before they
reach the pagination state.
"""

import math
from typing import Any, List, Union

Number = Union[int, float]

_TRUTHY_STRINGS = {"true", "1", "yes", "on"}


def ensure_valid_number(value: Any, fallback: Number = 0) -> Number:
    """Convert ``value`` to a finite number, or return ``fallback``.

    Args:
        value: Anything the remote side sent
        fallback: Value returned when conversion fails or gives NaN/infinity

    Returns:
        The numeric value, or the fallback
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else fallback
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return fallback
    try:
        num = float(value)
    except (TypeError, ValueError, OverflowError):
        return fallback
    if not math.isfinite(num):
        return fallback
    return int(num) if num.is_integer() else num


def ensure_valid_bool(value: Any, fallback: bool = False) -> bool:
    """Coerce a remote flag to a real bool. Absent or unknown values give ``fallback``."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return fallback
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY_STRINGS
    return fallback


def ensure_valid_count(value: Any) -> int:
    """Non-negative integer count, 0 for anything unusable."""
    return max(0, int(ensure_valid_number(value, 0)))


def ensure_valid_cursor(value: Any) -> int:
    """Validate a pagination offset read back from state.

    A corrupted cursor (bool, NaN, negative, non-number) falls back to 0 so
    that an invalid offset is never sent to the machine.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    if value < 0:
        return 0
    return int(value)


def is_valid_cursor(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0


def ensure_sequence(value: Any) -> List[Any]:
    """Return ``value`` as a list if it is a list or tuple, else an empty list."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def remaining_count(total: Any, loaded: Any) -> int:
    """Records still available on the machine; never negative."""
    return max(0, ensure_valid_count(total) - ensure_valid_count(loaded))
