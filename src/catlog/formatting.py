from __future__ import annotations

"""
Message Formatting.

Builds the final text handed to a backend. Console output carries an optional
timestamp, a one-letter severity tag with the category, and for errors and
faults the call-site location. System-log output is the bare message, since
the system transport attaches its own time, process and thread metadata.

Formatting never fails: missing optional context renders as an empty segment.
"""

import os
from datetime import timedelta
from typing import Optional, Sequence

from catlog.clock import MonotonicClock, process_clock
from catlog.config import LogConfig
from catlog.levels import Severity
from catlog.records import LogRecord, current_queue_name, current_thread_name

# locale-dependent time of day, "%H:%M:%S" in the C locale
LOCALE_TIME_FMT = "%X"


# -----------------------------------------------------------------------------
# TIMESTAMPS
# -----------------------------------------------------------------------------

def format_timestamp(config: LogConfig, clock: Optional[MonotonicClock] = None) -> str:
    """
    Render the console timestamp prefix.

    Args:
        config: Active policy; decides whether and how to render.
        clock: Time source. Defaults to the process clock.

    Returns:
        str: Empty when timestamps are off, otherwise the timestamp followed
        by a single space.
    """
    if not config.show_timestamps:
        return ""

    clock = clock or process_clock()
    seconds = clock.elapsed()
    if config.use_absolute_timestamps:
        moment = clock.start_date + timedelta(seconds=seconds)
        return localized_time(moment) + " "
    return "%.3fs " % seconds


def localized_time(moment) -> str:
    """
    Render a time of day in the locale's representation with milliseconds.

    The locale's time format (strftime "%X") decides field order, separators
    and any AM/PM marker; milliseconds are inserted right after the seconds,
    as in "14:40:21.201" or "02:40:21.201 PM".
    """
    text = moment.strftime(LOCALE_TIME_FMT)
    millis = f".{moment.microsecond // 1000:03d}"
    seconds = moment.strftime("%S")
    idx = text.rfind(seconds)
    if idx < 0:
        return text + millis
    cut = idx + len(seconds)
    return text[:cut] + millis + text[cut:]


# -----------------------------------------------------------------------------
# LOCATION
# -----------------------------------------------------------------------------

def format_location(
        file: str,
        line: int,
        function: str,
        thread_name: Optional[str] = None,
        queue_name: Optional[str] = None,
) -> str:
    """
    Render the call-site block shown under console errors and faults.

    Thread and queue names are read from the running context when not given.
    The queue name is appended after a colon only when non-empty.
    """
    if thread_name is None:
        thread_name = current_thread_name()
    if queue_name is None:
        queue_name = current_queue_name()
    if queue_name:
        queue_name = ":" + queue_name

    text = f" at {file}:{line}@{function}\n"
    text += f" on {thread_name}{queue_name}"
    return text


# -----------------------------------------------------------------------------
# MESSAGES
# -----------------------------------------------------------------------------

def format_message(
        config: LogConfig,
        category: str,
        severity: Severity,
        message: str,
        file: str = "",
        line: int = 0,
        function: str = "",
        *,
        clock: Optional[MonotonicClock] = None,
        stack: Optional[Sequence[str]] = None,
        thread_name: Optional[str] = None,
        queue_name: Optional[str] = None,
) -> str:
    """
    Compose the text written to the active backend.

    Args:
        config: Active policy; selects console or system-log layout.
        category: Logger category.
        severity: Message level.
        message: Caller text, included verbatim.
        file: Short file name for the location block.
        line: Line number for the location block.
        function: Function name for the location block.
        clock: Time source for the timestamp prefix.
        stack: Captured frames appended when stack traces are enabled.
        thread_name: Overrides the running thread name.
        queue_name: Overrides the running asyncio task name.

    Returns:
        str: Formatted text, never shorter than the message.
    """
    message = f"{message}"

    if config.use_console_backend:
        text = f"{_safe_timestamp(config, clock)}{severity.tag}[{category}] {message}"
        if severity.shows_location:
            text += "\n"
            text += _safe_location(file, line, function, thread_name, queue_name)
    else:
        text = message

    if config.show_stack_traces and severity.shows_location:
        text += "\n"
        for frame in stack or ():
            text += frame + "\n"

    return text


def format_record(
        config: LogConfig,
        record: LogRecord,
        clock: Optional[MonotonicClock] = None,
) -> str:
    """Format a captured record; see format_message."""
    return format_message(
        config,
        record.category,
        record.severity,
        record.message,
        record.file,
        record.line,
        record.function,
        clock=clock,
        stack=record.stack,
        thread_name=record.thread_name,
        queue_name=record.queue_name,
    )


def strip_file_path_and_extension(path: str) -> str:
    """Reduce '/a/b/Foo.py' to 'Foo'."""
    return os.path.basename(os.path.splitext(path or "")[0])


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _safe_timestamp(config: LogConfig, clock: Optional[MonotonicClock]) -> str:
    try:
        return format_timestamp(config, clock)
    except (OverflowError, ValueError, OSError):
        return ""


def _safe_location(
        file: str,
        line: int,
        function: str,
        thread_name: Optional[str],
        queue_name: Optional[str],
) -> str:
    try:
        return format_location(file, line, function, thread_name, queue_name)
    except RuntimeError:
        return ""
