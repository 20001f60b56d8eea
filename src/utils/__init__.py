"""Shared helpers."""

from .clock import Clock, ManualClock, wall_clock_ms

__all__ = ["Clock", "ManualClock", "wall_clock_ms"]
