"""Time sources for the playback loop.

All readings are in milliseconds. Engines and the scheduler only ever call
``now()``, so any object with that method can stand in for a clock.
"""

from __future__ import annotations

import time
from typing import Protocol


class TimeSource(Protocol):
    def now(self) -> float: ...


class MonotonicClock:
    """Wall clock backed by ``time.monotonic_ns`` (sub-millisecond)."""

    def now(self) -> float:
        return time.monotonic_ns() / 1_000_000


class ManualClock:
    """Clock that only moves when told to. Used for stepping and tests."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> float:
        if ms < 0:
            raise ValueError("cannot advance clock by a negative amount")
        self._now += ms
        return self._now

    def set(self, ms: float) -> None:
        if ms < self._now:
            raise ValueError(f"clock cannot go backwards ({ms} < {self._now})")
        self._now = float(ms)


def tick_period_ms(frequency: float) -> float:
    """Convert an update frequency in ticks per second to a period in ms."""
    if frequency <= 0:
        raise ValueError("frequency must be positive")
    return 1000.0 / frequency
