from __future__ import annotations

"""
Unit tests for the Monotonic Clock.

Verifies:
1. Tick-to-second calibration from the timebase ratio.
2. One-time calibration under concurrent first use.
3. Monotonic readings on a single timeline.
4. Wall-clock fallback when the high-resolution counter is missing.
"""

import threading
import time
import types
from unittest.mock import MagicMock, patch

import pytest

from catlog import clock as clock_mod
from catlog.clock import MonotonicClock, elapsed, process_clock, timestamp


def test_calibration_uses_timebase_ratio():
    clock = MonotonicClock(ticks=lambda: 3_000, timebase=lambda: (125, 3))
    assert clock.seconds_per_tick == pytest.approx(125 / 3 * 1e-9)
    assert clock.now() == pytest.approx(3_000 * 125 / 3 * 1e-9)


def test_calibration_runs_once():
    timebase = MagicMock(return_value=(1, 1))
    clock = MonotonicClock(ticks=lambda: 10, timebase=timebase)

    for _ in range(5):
        clock.now()

    timebase.assert_called_once()


def test_concurrent_first_calls_share_one_factor():
    """N threads racing on first use observe a single cached factor."""
    calls = []
    barrier = threading.Barrier(8)

    def slow_timebase():
        calls.append(1)
        time.sleep(0.01)
        return 1, 1

    clock = MonotonicClock.__new__(MonotonicClock)
    clock._ticks = lambda: 42
    clock._timebase = slow_timebase
    clock._seconds_per_tick = None
    clock._lock = threading.Lock()

    factors = []

    def worker():
        barrier.wait()
        factors.append(clock.seconds_per_tick)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert len(set(factors)) == 1


def test_readings_never_decrease():
    clock = MonotonicClock()
    readings = [clock.now() for _ in range(1000)]
    assert readings == sorted(readings)


def test_elapsed_is_relative_to_creation(fake_ticks, fake_clock):
    assert fake_clock.elapsed() == pytest.approx(0.0)
    fake_ticks.advance(2.5)
    assert fake_clock.elapsed() == pytest.approx(2.5)


def test_elapsed_is_absolute_value(fake_ticks, fake_clock):
    fake_ticks.advance(-1.0)
    assert fake_clock.elapsed() == pytest.approx(1.0)


def test_wall_clock_fallback_without_perf_counter():
    fake_time = types.SimpleNamespace(time_ns=lambda: 7_000_000_000)
    with patch.object(clock_mod, "time", fake_time):
        clock = MonotonicClock()
    assert clock.now() == pytest.approx(7.0)


def test_process_clock_helpers():
    assert process_clock() is clock_mod._PROCESS_CLOCK
    first = timestamp()
    second = timestamp()
    assert second >= first
    assert elapsed() >= 0.0
