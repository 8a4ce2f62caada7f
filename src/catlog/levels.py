from __future__ import annotations

"""
Severity Levels and Sink Mappings.

Defines the ordered severity enum used for filtering, the single-letter tags
rendered by the console backend, and the translation onto the numeric levels
understood by the system-log transport.
"""

import logging
from enum import IntEnum
from typing import Dict, Optional


class Severity(IntEnum):
    """Ordered log importance, lowest first."""
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    FAULT = 50

    @property
    def tag(self) -> str:
        return _TAGS[self]

    @property
    def shows_location(self) -> bool:
        """Whether console output carries the location block and stack trace."""
        return self >= Severity.ERROR


# -----------------------------------------------------------------------------
# Console tags
# -----------------------------------------------------------------------------
_TAGS: Dict[Severity, str] = {
    Severity.DEBUG: "D",
    Severity.INFO: "I",
    Severity.WARN: "W",
    Severity.ERROR: "E",
    Severity.FAULT: "F",
}

# -----------------------------------------------------------------------------
# System sink levels
# -----------------------------------------------------------------------------
# The system transport has no warning level; warnings share the generic one.
SINK_DEFAULT = 25
logging.addLevelName(SINK_DEFAULT, "DEFAULT")

_SINK_LEVELS: Dict[Severity, int] = {
    Severity.DEBUG: logging.DEBUG,
    Severity.INFO: logging.INFO,
    Severity.WARN: SINK_DEFAULT,
    Severity.ERROR: logging.ERROR,
    Severity.FAULT: logging.CRITICAL,
}

# Mapping of string identifiers to severities
_LEVEL_MAP: Dict[str, Severity] = {
    "DEBUG": Severity.DEBUG,
    "INFO": Severity.INFO,
    "WARN": Severity.WARN,
    "WARNING": Severity.WARN,
    "ERROR": Severity.ERROR,
    "FAULT": Severity.FAULT,
    "CRITICAL": Severity.FAULT,
}


def sink_level(severity: Optional[Severity]) -> int:
    """
    Translate a severity into the system-log transport level.

    Args:
        severity: Severity to translate; None means unspecified.

    Returns:
        int: Numeric level; unspecified severities use the generic level.
    """
    if severity is None:
        return SINK_DEFAULT
    return _SINK_LEVELS.get(severity, SINK_DEFAULT)


def parse_severity(level: str, default: Severity = Severity.INFO) -> Severity:
    """Convert a level name such as "warning" or "DEBUG" to a Severity."""
    if not level:
        return default
    return _LEVEL_MAP.get(str(level).strip().upper(), default)
