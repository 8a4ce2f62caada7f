from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Independent configuration instances so tests never touch the shared one.
3. Deterministic clocks and a recording backend for output assertions.
"""

import os
import sys
from typing import List, Tuple

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from catlog.backends import LogBackend  # noqa: E402
from catlog.clock import MonotonicClock  # noqa: E402
from catlog.config import LogConfig  # noqa: E402
from catlog.levels import Severity  # noqa: E402
from catlog.records import LogRecord  # noqa: E402


# -----------------------------------------------------------------------------
# Test Doubles
# -----------------------------------------------------------------------------
class RecordingBackend(LogBackend):
    """Backend that keeps every write in memory."""

    def __init__(self, min_level: Severity = Severity.DEBUG):
        self.min_level = min_level
        self.writes: List[Tuple[LogRecord, str]] = []

    def is_enabled(self, severity: Severity) -> bool:
        return severity >= self.min_level

    def write(self, record: LogRecord, text: str) -> None:
        self.writes.append((record, text))

    @property
    def texts(self) -> List[str]:
        return [text for _, text in self.writes]


class FakeTicks:
    """Manually advanced tick counter (nanoseconds)."""

    def __init__(self, start: int = 0):
        self.value = start

    def __call__(self) -> int:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += int(seconds * 1_000_000_000)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def console_config() -> LogConfig:
    """Console backend without timestamps, for exact-match assertions."""
    return LogConfig(
        use_console_backend=True,
        show_timestamps=False,
        show_stack_traces=False,
        subsystem="com.example.tests",
    )


@pytest.fixture
def system_config() -> LogConfig:
    """System-log backend with a fixed subsystem."""
    return LogConfig(use_console_backend=False, subsystem="com.example.tests")


@pytest.fixture
def fake_ticks() -> FakeTicks:
    return FakeTicks(start=1_000_000_000)


@pytest.fixture
def fake_clock(fake_ticks: FakeTicks) -> MonotonicClock:
    """Clock whose readings are driven by `fake_ticks`."""
    return MonotonicClock(ticks=fake_ticks)


@pytest.fixture
def recording_backend() -> RecordingBackend:
    return RecordingBackend()
