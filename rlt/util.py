"""Helpers for formatting byte counts and computing rates."""

from __future__ import annotations

import math

_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB")
_MAX_BYTES = 2**64 - 1


def human_bytes(value: int | float, precision: int) -> str:
    """Format a byte count with the largest fitting binary unit.

    Returns "N/A" for values that cannot be represented (NaN, infinite,
    negative or too large).
    """
    if isinstance(value, float):
        if not math.isfinite(value) or value < 0:
            return "N/A"
        value = math.ceil(value)
    if value < 0 or value > _MAX_BYTES:
        return "N/A"

    exponent = 0
    while exponent + 1 < len(_UNITS) and value >= 1024 ** (exponent + 1):
        exponent += 1
    scaled = value / 1024**exponent
    return f"{scaled:.{precision}f} {_UNITS[exponent]}"


def rate(count: int, elapsed: float) -> float:
    """Return count per second, or 0.0 when elapsed is not positive."""
    return count / elapsed if elapsed > 0.0 else 0.0