"""
agcod_sdk.tier0_core.ids
─────────────────────────
Sequential id generation. A sequential id is the current time in nanoseconds
(seconds × 10^9 + nanoseconds) written in lowercase base 36. Ids sort in time
order as long as they have the same width, which holds from 1974 until early 2120.

There is no collision avoidance: two ids taken inside the same clock tick are
equal. Callers issuing requests at very high rates must space them out.
"""
from __future__ import annotations

from agcod_sdk.tier1_runtime.clock import Clock, get_clock

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    """Encode a non-negative integer in lowercase base 36."""
    if value < 0:
        raise ValueError(f"Cannot encode negative value {value!r} in base 36")
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def new_sequential_id(clock: Clock | None = None) -> str:
    """Return a base-36 id derived from the clock's nanosecond timestamp."""
    return to_base36((clock or get_clock()).timestamp_ns())


__all__ = ["to_base36", "new_sequential_id"]
