from __future__ import annotations

from .clock import MonotonicClock, elapsed, timestamp
from .config import DEBUG_BUILD, LogConfig, configure, get_config
from .errors import CatlogError, SubsystemNotConfiguredError
from .levels import Severity, parse_severity
from .logger import Log

__all__ = [
    "Log",
    "LogConfig",
    "Severity",
    "MonotonicClock",
    "DEBUG_BUILD",
    "configure",
    "get_config",
    "parse_severity",
    "timestamp",
    "elapsed",
    "CatlogError",
    "SubsystemNotConfiguredError",
]
