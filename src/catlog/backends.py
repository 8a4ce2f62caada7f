from __future__ import annotations

"""
Output Backends.

Two interchangeable transports behind one interface: a console writer for
human-readable output on stdout, and a system-log writer that forwards the
bare message to the platform syslog service with the category as its
channel. Each Logger picks its backend from the shared configuration.
"""

import logging
import os
import socket
import sys
from abc import ABC, abstractmethod
from logging.handlers import SysLogHandler
from typing import Optional, Tuple, Union

from catlog.config import LogConfig, resolve_subsystem
from catlog.levels import Severity, sink_level
from catlog.records import LogRecord

logger = logging.getLogger(__name__)

# Attribute used to tag handlers created by this module
_HANDLER_TAG_ATTR: str = "_catlog_handler"

# Well-known local syslog sockets, checked in order
_SYSLOG_SOCKETS: Tuple[str, ...] = ("/dev/log", "/var/run/syslog", "/var/run/log")
_SYSLOG_UDP: Tuple[str, int] = ("localhost", 514)


class LogBackend(ABC):
    """Transport receiving formatted log text."""

    @abstractmethod
    def is_enabled(self, severity: Severity) -> bool:
        """Whether a message at this severity would actually be emitted."""

    @abstractmethod
    def write(self, record: LogRecord, text: str) -> None:
        """Emit formatted text. Fire-and-forget."""


# -----------------------------------------------------------------------------
# CONSOLE
# -----------------------------------------------------------------------------

class ConsoleBackend(LogBackend):
    """Writes newline-terminated UTF-8 text to standard output."""

    def __init__(self, config: LogConfig):
        self._config = config

    def is_enabled(self, severity: Severity) -> bool:
        return severity >= self._config.min_level

    def write(self, record: LogRecord, text: str) -> None:
        # resolved per call so redirected stdout is honoured
        stream = sys.stdout
        if stream is None:
            return
        line = text + "\n"
        try:
            buffer = getattr(stream, "buffer", None)
            if buffer is not None and not _is_utf8(stream):
                stream.flush()
                buffer.write(line.encode("utf-8", errors="replace"))
                buffer.flush()
            else:
                stream.write(line)
                stream.flush()
        except (OSError, ValueError, UnicodeError):
            # closed or broken stdout; console output is fire-and-forget
            pass


# -----------------------------------------------------------------------------
# SYSTEM LOG
# -----------------------------------------------------------------------------

class SystemLogBackend(LogBackend):
    """
    Forwards messages to the platform system log.

    Each subsystem/category pair maps to the stdlib logger
    "<subsystem>.<category>", so handlers are created once and shared by all
    Loggers with the same category.
    """

    def __init__(
            self,
            config: LogConfig,
            category: str,
            handler: Optional[logging.Handler] = None,
            subsystem: Optional[str] = None,
    ):
        """
        Bind the backend to a category channel.

        Args:
            config: Active policy, used to resolve the subsystem.
            category: Channel name; passed to the sink, never interpolated.
            handler: Transport override. Defaults to a SysLogHandler.
            subsystem: Pre-resolved subsystem identifier.

        Raises:
            SubsystemNotConfiguredError: If no subsystem can be resolved.
        """
        self.subsystem = subsystem or resolve_subsystem(config)
        self.category = category
        self._config = config
        self.channel = logging.getLogger(f"{self.subsystem}.{category}")
        # the channel passes everything; each backend filters with its own config
        if self.channel.level == logging.NOTSET:
            self.channel.setLevel(logging.DEBUG)
        # system log only; never echoed through application root handlers
        self.channel.propagate = False

        if handler is not None:
            if handler not in self.channel.handlers:
                _tag_handler(handler)
                self.channel.addHandler(handler)
        elif not any(_is_our_handler(h) for h in self.channel.handlers):
            self.channel.addHandler(_create_syslog_handler(self.subsystem))

    def is_enabled(self, severity: Severity) -> bool:
        if severity < self._config.min_level:
            return False
        return self.channel.isEnabledFor(sink_level(severity))

    def write(self, record: LogRecord, text: str) -> None:
        if not self.is_enabled(record.severity):
            return
        self.channel.log(
            sink_level(record.severity), "%s", text, extra={"category": self.category}
        )


def select_backend(config: LogConfig, category: str) -> LogBackend:
    """Choose the transport named by the configuration."""
    if config.use_console_backend:
        return ConsoleBackend(config)
    return SystemLogBackend(config, category)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _is_utf8(stream) -> bool:
    encoding = getattr(stream, "encoding", None) or ""
    return encoding.lower().replace("_", "-") in ("utf-8", "utf8")


def _syslog_address() -> Union[str, Tuple[str, int]]:
    for path in _SYSLOG_SOCKETS:
        if os.path.exists(path):
            return path
    return _SYSLOG_UDP


def _create_syslog_handler(subsystem: str) -> SysLogHandler:
    """
    Build a handler for the local syslog service.

    The subsystem is used as the syslog ident; the category travels in
    the record and is shown in brackets. When the local socket cannot be opened the handler falls
    back to UDP, which never fails on connect.
    """
    address = _syslog_address()
    try:
        handler = SysLogHandler(address=address, facility=SysLogHandler.LOG_USER)
    except OSError as e:
        logger.debug("Syslog socket %s unavailable (%s); using UDP.", address, e)
        handler = SysLogHandler(
            address=_SYSLOG_UDP,
            facility=SysLogHandler.LOG_USER,
            socktype=socket.SOCK_DGRAM,
        )
    handler.ident = f"{subsystem}: "
    handler.priority_map = dict(handler.priority_map, DEFAULT="notice")
    handler.setFormatter(logging.Formatter("[%(category)s] %(message)s"))
    _tag_handler(handler)
    return handler
