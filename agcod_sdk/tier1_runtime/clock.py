"""
agcod_sdk.tier1_runtime.clock
──────────────────────────────
Mockable time source. The request signer (X-Amz-Date) and the sequential id
generator read time from here instead of calling time.time_ns() directly, so
tests can freeze both.
"""
from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone
from typing import Callable

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _to_ns(dt: datetime) -> int:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - _EPOCH) // timedelta(microseconds=1) * 1000


# ── Clock implementation ───────────────────────────────────────────────────

class Clock:
    """Mockable clock backed by a nanosecond counter since the Unix epoch."""

    def __init__(self, ns_fn: Callable[[], int] | None = None) -> None:
        self._ns_fn = ns_fn or time.time_ns

    def timestamp_ns(self) -> int:
        """Return nanoseconds since the Unix epoch."""
        return self._ns_fn()

    def now(self) -> datetime:
        """Return the current UTC datetime (microsecond precision)."""
        return _EPOCH + timedelta(microseconds=self.timestamp_ns() // 1000)

    def freeze(self, dt: datetime) -> "Clock":
        """Return a new Clock frozen at the given datetime."""
        ns = _to_ns(dt)
        return Clock(ns_fn=lambda: ns)

    def advance(self, seconds: float) -> "Clock":
        """Return a new Clock frozen *seconds* after this clock's current time."""
        ns = self.timestamp_ns() + int(seconds * 1e9)
        return Clock(ns_fn=lambda: ns)


# ── Module-level singleton ─────────────────────────────────────────────────

_clock = Clock()


def get_clock() -> Clock:
    """Return the global clock instance."""
    return _clock


__all__ = ["Clock", "get_clock"]
