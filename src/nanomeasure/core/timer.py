"""
Start/stop timer that turns two clock readings into a Measurement.

Provides the lowest-level timing primitive used by all interfaces.
"""

import time
from typing import Callable, Optional

from .measurement import Measurement

Clock = Callable[[], int]


class Timer:
    """
    Context-manager and manual start/stop timer.

    Reads a nanosecond clock before and after the measured work; the
    default time.perf_counter_ns is monotonic, so the result is immune
    to system clock adjustments. Tests inject a deterministic clock.
    """

    def __init__(self, clock: Optional[Clock] = None):
        """
        Args:
            clock: Zero-argument callable returning nanoseconds;
                defaults to time.perf_counter_ns
        """
        self._clock = clock or time.perf_counter_ns
        self._start_ns: Optional[int] = None
        self._measurement: Optional[Measurement] = None

    def start(self) -> "Timer":
        """Start the timer and return self for chaining."""
        self._start_ns = self._clock()
        self._measurement = None
        return self

    def stop(self) -> Measurement:
        """Stop the timer and return the elapsed Measurement."""
        if self._start_ns is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._measurement = Measurement.between(self._start_ns, self._clock())
        return self._measurement

    def __enter__(self) -> "Timer":
        """Start timing on context entry."""
        return self.start()

    def __exit__(self, *_) -> None:
        """Stop timing on context exit."""
        self.stop()

    @property
    def measurement(self) -> Optional[Measurement]:
        """Return the completed Measurement, or None if not yet stopped."""
        return self._measurement
