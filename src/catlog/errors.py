from __future__ import annotations

"""
Exception hierarchy for catlog.

Formatting and backend writes never raise; the only failure surfaced to
callers is a startup misconfiguration of the system-log sink.
"""


class CatlogError(Exception):
    """Base class for all catlog errors."""


class SubsystemNotConfiguredError(CatlogError, RuntimeError):
    """
    Raised when a system-log Logger is built without a subsystem identifier.

    The subsystem is a one-time startup invariant; a process that cannot
    resolve it is misconfigured and should not continue logging silently.
    """
