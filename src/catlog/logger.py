from __future__ import annotations

"""
Per-Category Logger.

Usage, typically once per module:

    log = Log()                  # category from this file's name
    log = Log("Network/Session") # explicit hierarchical category

    log.debug("debug text")
    log.info("info text")
    log.error("error text")

Guard expensive arguments with the enablement queries; the emit methods
always evaluate their message argument:

    if log.is_info_enabled():
        log.info(f"population: {count_people_in_all_countries()}")

Console output (configure(True, ...)):

    14:40:21.185 D[GameScene] debug text
    14:40:21.321 E[GameScene] error text
     at GameScene:75@load_level
     on MainThread:Task-1
"""

import sys
import threading
from typing import Optional, Tuple

from catlog.backends import ConsoleBackend, LogBackend, SystemLogBackend
from catlog.clock import MonotonicClock
from catlog.config import DEBUG_BUILD, LogConfig, get_config, resolve_subsystem
from catlog.formatting import format_record, strip_file_path_and_extension
from catlog.levels import Severity
from catlog.records import (
    LogRecord,
    capture_stack,
    current_queue_name,
    current_thread_name,
)

# _caller_site -> _make_record -> _emit -> public method -> caller
_CALLER_DEPTH = 4


class Log:
    """
    Leveled logger bound to one category.

    Instances are independent; several may share a category. The backend is
    chosen per call from the configuration, so loggers created at import time
    follow a later configure() call.
    """

    def __init__(
            self,
            category: Optional[str] = None,
            file: Optional[str] = None,
            *,
            config: Optional[LogConfig] = None,
            backend: Optional[LogBackend] = None,
            clock: Optional[MonotonicClock] = None,
    ):
        """
        Bind a logger to a category.

        Args:
            category: Category name or source path. Paths ending in ".py" are
                reduced to their stem; anything else, including hierarchical
                "Group/Subgroup" names, is kept verbatim. Defaults to the
                calling file.
            file: Source path reported in error locations. Defaults to the
                calling file.
            config: Policy to follow. Defaults to the process-wide instance.
            backend: Fixed transport, bypassing configuration-based selection.
            clock: Time source for timestamps. Defaults to the process clock.

        Raises:
            SubsystemNotConfiguredError: If the logger starts on the system
                log and no subsystem identifier can be resolved. Console
                loggers resolve it when first switched to the system log.
        """
        if category is None or file is None:
            caller_file = sys._getframe(1).f_code.co_filename
            category = caller_file if category is None else category
            file = caller_file if file is None else file

        self.category: str = category
        if category.endswith(".py"):
            self.category = strip_file_path_and_extension(category)

        # Compute once for use in error locations.
        self.file: str = strip_file_path_and_extension(file)

        self._config = config if config is not None else get_config()
        self._clock = clock
        self._backend = backend
        self.subsystem: Optional[str] = None
        if backend is None and not self._config.use_console_backend:
            self.subsystem = resolve_subsystem(self._config)

        self._console: Optional[ConsoleBackend] = None
        self._system: Optional[SystemLogBackend] = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Log(category={self.category!r}, file={self.file!r})"

    # -------------------------------------------------------------------------
    # Enablement
    # -------------------------------------------------------------------------

    def is_warn_enabled(self) -> bool:
        return self.backend.is_enabled(Severity.WARN)

    def is_info_enabled(self) -> bool:
        return self.backend.is_enabled(Severity.INFO)

    def is_debug_enabled(self) -> bool:
        if not DEBUG_BUILD:
            return False
        return self.backend.is_enabled(Severity.DEBUG)

    # -------------------------------------------------------------------------
    # Emit
    # -------------------------------------------------------------------------

    def fault(self, message: str) -> None:
        self._emit(Severity.FAULT, message)

    def error(
            self,
            message: str,
            function: Optional[str] = None,
            line: Optional[int] = None,
    ) -> None:
        """
        Log an error with its call-site location.

        Args:
            message: Text to log.
            function: Reported function name. Defaults to the caller's.
            line: Reported line number. Defaults to the caller's.
        """
        self._emit(Severity.ERROR, message, function, line)

    def warn(self, message: str) -> None:
        self._emit(Severity.WARN, message)

    def info(self, message: str) -> None:
        self._emit(Severity.INFO, message)

    def debug(self, message: str) -> None:
        # removed by the compiler under `python -O`
        if __debug__:
            self._emit(Severity.DEBUG, message)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    @property
    def backend(self) -> LogBackend:
        """Transport selected by the current configuration."""
        if self._backend is not None:
            return self._backend
        if self._config.use_console_backend:
            if self._console is None:
                self._console = ConsoleBackend(self._config)
            return self._console
        if self._system is None:
            with self._lock:
                if self._system is None:
                    self._system = SystemLogBackend(
                        self._config, self.category, subsystem=self.subsystem
                    )
        return self._system

    def _emit(
            self,
            severity: Severity,
            message: str,
            function: Optional[str] = None,
            line: Optional[int] = None,
    ) -> None:
        backend = self.backend
        if not backend.is_enabled(severity):
            return

        record = self._make_record(severity, message, function, line)
        text = format_record(self._config, record, self._clock)
        backend.write(record, text)

    def _make_record(
            self,
            severity: Severity,
            message: str,
            function: Optional[str],
            line: Optional[int],
    ) -> LogRecord:
        if not severity.shows_location:
            return LogRecord(severity=severity, category=self.category, message=message)

        caller_function, caller_line = _caller_site(_CALLER_DEPTH)
        stack: Tuple[str, ...] = ()
        if self._config.show_stack_traces:
            # drop capture_stack, _make_record, _emit and the public method
            stack = capture_stack(skip=4)

        return LogRecord(
            severity=severity,
            category=self.category,
            message=message,
            file=self.file,
            line=caller_line if line is None else line,
            function=caller_function if function is None else function,
            thread_name=current_thread_name(),
            queue_name=current_queue_name(),
            stack=stack,
        )


def _caller_site(depth: int) -> Tuple[str, int]:
    """Function name and line of the frame `depth` levels up from here."""
    try:
        frame = sys._getframe(depth)
    except ValueError:
        return "", 0
    code = frame.f_code
    return getattr(code, "co_qualname", code.co_name), frame.f_lineno
