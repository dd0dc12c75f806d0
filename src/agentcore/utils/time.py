"""Time utilities for agentcore.

Provides timezone-aware timestamps, millisecond clocks and the base36
encoding used when building execution identifiers.
"""

import string
import time
from datetime import UTC, datetime

_BASE36_DIGITS = string.digits + string.ascii_lowercase


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime.

    Returns:
        datetime: Current UTC time with tzinfo=UTC
    """
    return datetime.now(UTC)


def monotonic_ms() -> float:
    """Monotonic clock reading in milliseconds, for measuring durations."""
    return time.monotonic() * 1000.0


def epoch_ms() -> int:
    """Wall-clock milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def to_base36(value: int) -> str:
    """Encode a non-negative integer in lowercase base36.

    Args:
        value: Integer to encode.

    Returns:
        The base36 representation (``"0"`` for zero).

    Raises:
        ValueError: If value is negative.
    """
    if value < 0:
        raise ValueError(f"value must be >= 0, got {value}")
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))
