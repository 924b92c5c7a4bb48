"""Runtime services: telemetry and time sources."""

from .clock import Clock, ManualClock, MonotonicClock

__all__ = ["Clock", "ManualClock", "MonotonicClock"]
