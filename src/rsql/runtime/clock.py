"""Time sources used for edit coalescing."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Anything that can tell the time in seconds."""

    def now(self) -> float:
        ...

    def elapsed_since(self, timestamp: float) -> float:
        ...


class MonotonicClock:
    """Wall-clock source backed by ``time.monotonic``."""

    def now(self) -> float:
        return time.monotonic()

    def elapsed_since(self, timestamp: float) -> float:
        return time.monotonic() - timestamp


class ManualClock:
    """Clock that only moves when told to. Used to simulate idle gaps."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start

    def now(self) -> float:
        return self._now

    def elapsed_since(self, timestamp: float) -> float:
        return self._now - timestamp

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError("clock cannot move backwards")
        self._now += seconds


__all__ = ["Clock", "MonotonicClock", "ManualClock"]
