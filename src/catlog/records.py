from __future__ import annotations

"""
Per-call log record and the runtime context it captures.
"""

import asyncio
import threading
import traceback
from dataclasses import dataclass, field
from typing import Tuple

from catlog.levels import Severity


@dataclass(frozen=True)
class LogRecord:
    """
    One emit call, built fresh and discarded after the backend write.

    Attributes:
        severity: Level of the message.
        category: Logger category, used as the system-log channel.
        message: Caller-supplied text.
        file: Short source file name of the call site.
        line: Source line of the call site, 0 when unknown.
        function: Calling function, empty when unknown.
        thread_name: Name of the emitting thread.
        queue_name: Name of the running asyncio task, if any.
        stack: Captured call-stack frames, outermost first.
    """
    severity: Severity
    category: str
    message: str
    file: str = ""
    line: int = 0
    function: str = ""
    thread_name: str = ""
    queue_name: str = ""
    stack: Tuple[str, ...] = field(default_factory=tuple)


# -----------------------------------------------------------------------------
# CONTEXT CAPTURE
# -----------------------------------------------------------------------------

def current_thread_name() -> str:
    return threading.current_thread().name or ""


def current_queue_name() -> str:
    """Name of the asyncio task running on this thread, or an empty string."""
    try:
        task = asyncio.current_task()
    except RuntimeError:
        # no running event loop
        return ""
    if task is None:
        return ""
    return task.get_name() or ""


def capture_stack(skip: int = 1) -> Tuple[str, ...]:
    """
    Capture the calling thread's stack as opaque text frames.

    Args:
        skip: Innermost frames to drop, so catlog's own frames are omitted.

    Returns:
        Tuple[str, ...]: One entry per frame, outermost first.
    """
    frames = traceback.format_stack()
    if skip > 0:
        frames = frames[:-skip] if len(frames) > skip else []
    return tuple(f.rstrip("\n") for f in frames)
