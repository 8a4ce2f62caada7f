from __future__ import annotations

"""
Monotonic Clock.

Provides a drift-stable elapsed-time source in seconds, independent of the
wall clock. The tick-to-second conversion factor is computed lazily on first
use and cached for the lifetime of the clock. Clock rate can change under
CPU throttling; the cached factor is an accepted approximation.
"""

import logging
import threading
import time
from datetime import datetime
from typing import Callable, Optional, Tuple

logger = logging.getLogger(__name__)

TickSource = Callable[[], int]
TimebaseSource = Callable[[], Tuple[int, int]]


# -----------------------------------------------------------------------------
# TIMER PRIMITIVES
# -----------------------------------------------------------------------------

def _nanosecond_timebase() -> Tuple[int, int]:
    """Timebase of the nanosecond counters: one tick is one nanosecond."""
    return 1, 1


def _default_ticks() -> Tuple[TickSource, bool]:
    """
    Pick the raw tick counter.

    Returns:
        Tuple[TickSource, bool]: The counter and whether it is monotonic.
    """
    counter = getattr(time, "perf_counter_ns", None)
    if counter is not None:
        return counter, True
    return time.time_ns, False


# -----------------------------------------------------------------------------
# CLOCK
# -----------------------------------------------------------------------------

class MonotonicClock:
    """
    Calibrated high-resolution clock.

    The start instant and the matching wall-clock date are captured when the
    clock is created so relative and absolute timestamps share one origin.
    """

    def __init__(
            self,
            ticks: Optional[TickSource] = None,
            timebase: Optional[TimebaseSource] = None,
    ):
        """
        Initialize the clock and capture its origin.

        Args:
            ticks: Raw tick counter. Defaults to the nanosecond perf counter.
            timebase: Returns the (numerator, denominator) tick ratio.
        """
        if ticks is None:
            ticks, monotonic = _default_ticks()
            if not monotonic:
                logger.debug("High-resolution timer unavailable; using wall clock.")
        self._ticks = ticks
        self._timebase = timebase or _nanosecond_timebase

        self._seconds_per_tick: Optional[float] = None
        self._lock = threading.Lock()

        self.start = self.now()
        self.start_date = datetime.now()

    @property
    def seconds_per_tick(self) -> float:
        """Cached conversion factor, calibrated on first access."""
        factor = self._seconds_per_tick
        if factor is None:
            factor = self._calibrate()
        return factor

    def _calibrate(self) -> float:
        with self._lock:
            if self._seconds_per_tick is None:
                numer, denom = self._timebase()
                # inverse so readings can multiply
                self._seconds_per_tick = 1e-9 * (float(numer) / float(denom))
            return self._seconds_per_tick

    def now(self) -> float:
        """Current reading in seconds on this clock's timeline."""
        return float(self._ticks()) * self.seconds_per_tick

    def elapsed(self) -> float:
        """Seconds since the clock was created."""
        return abs(self.now() - self.start)


# Shared by every logger in the process.
_PROCESS_CLOCK = MonotonicClock()


def process_clock() -> MonotonicClock:
    return _PROCESS_CLOCK


def timestamp() -> float:
    """High-resolution timestamp in seconds, for use outside of logging."""
    return _PROCESS_CLOCK.now()


def elapsed() -> float:
    """Seconds since process start."""
    return _PROCESS_CLOCK.elapsed()
