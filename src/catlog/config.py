from __future__ import annotations

"""
Global Logging Configuration.

Holds the policy shared by every Logger: which backend receives output and
how console lines are decorated. A single process-wide instance is used by
default; tests and embedders may construct independent instances and inject
them into loggers.
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional

from catlog.errors import SubsystemNotConfiguredError
from catlog.levels import Severity

# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
# False under `python -O`; the interpreter folds checks on it at compile time.
DEBUG_BUILD: bool = __debug__

SUBSYSTEM_ENV_VAR = "CATLOG_SUBSYSTEM"


@dataclass
class LogConfig:
    """
    Shared formatting and routing policy.

    Attributes:
        use_console_backend: Print to stdout instead of the system log.
        show_stack_traces: Append the call stack to error and fault output.
        show_timestamps: Prefix console lines with a timestamp.
        use_absolute_timestamps: Wall-clock timestamps instead of elapsed seconds.
        subsystem: Identifier grouping all categories on the system log.
        min_level: Lowest severity either backend emits.
    """
    use_console_backend: bool = False
    show_stack_traces: bool = False
    show_timestamps: bool = True
    use_absolute_timestamps: bool = True

    subsystem: Optional[str] = None
    min_level: Severity = Severity.DEBUG


_GLOBAL_CONFIG = LogConfig()


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def get_config() -> LogConfig:
    """Return the process-wide configuration instance."""
    return _GLOBAL_CONFIG


def configure(
        use_console_backend: bool,
        show_timestamps: bool,
        show_stack_traces: bool,
        *,
        use_absolute_timestamps: Optional[bool] = None,
        config: Optional[LogConfig] = None,
) -> LogConfig:
    """
    Update the logging policy.

    Intended to run once at startup, before concurrent logging begins.

    Args:
        use_console_backend: Print to stdout instead of the system log.
        show_timestamps: Prefix console lines with a timestamp.
        show_stack_traces: Append the call stack to errors and faults.
        use_absolute_timestamps: Optional override of the timestamp style.
        config: Instance to mutate. Defaults to the process-wide one.

    Returns:
        LogConfig: The updated configuration.
    """
    cfg = config if config is not None else _GLOBAL_CONFIG
    cfg.use_console_backend = bool(use_console_backend)
    cfg.show_timestamps = bool(show_timestamps)
    cfg.show_stack_traces = bool(show_stack_traces)
    if use_absolute_timestamps is not None:
        cfg.use_absolute_timestamps = bool(use_absolute_timestamps)
    return cfg


def resolve_subsystem(config: LogConfig) -> str:
    """
    Determine the system-log subsystem identifier.

    Resolution order: explicit config value, the CATLOG_SUBSYSTEM environment
    variable, then the stem of the running script.

    Raises:
        SubsystemNotConfiguredError: If none of the sources yields a value.
    """
    candidates = (
        config.subsystem,
        os.environ.get(SUBSYSTEM_ENV_VAR),
        _script_stem(),
    )
    for value in candidates:
        if value and value.strip():
            return value.strip()
    raise SubsystemNotConfiguredError(
        f"No subsystem identifier: set LogConfig.subsystem or ${SUBSYSTEM_ENV_VAR}."
    )


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _script_stem() -> str:
    argv0 = sys.argv[0] if sys.argv else ""
    if not argv0 or argv0 == "-c":
        return ""
    stem = os.path.splitext(os.path.basename(argv0))[0]
    # `python -m pkg` runs pkg/__main__.py; name the package instead
    if stem == "__main__":
        stem = os.path.basename(os.path.dirname(os.path.abspath(argv0)))
    return stem
