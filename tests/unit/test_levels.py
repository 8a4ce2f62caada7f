from __future__ import annotations

"""
Unit tests for Severity levels.

Verifies ordering, console tags, system-sink level translation and the
string parser used by the CLI.
"""

import logging

import pytest

from catlog.levels import SINK_DEFAULT, Severity, parse_severity, sink_level


def test_severities_are_ordered_by_importance():
    assert Severity.DEBUG < Severity.INFO < Severity.WARN < Severity.ERROR < Severity.FAULT


@pytest.mark.parametrize("severity, tag", [
    (Severity.DEBUG, "D"),
    (Severity.INFO, "I"),
    (Severity.WARN, "W"),
    (Severity.ERROR, "E"),
    (Severity.FAULT, "F"),
])
def test_console_tags(severity, tag):
    assert severity.tag == tag


def test_only_error_and_fault_show_location():
    shown = [s for s in Severity if s.shows_location]
    assert shown == [Severity.ERROR, Severity.FAULT]


def test_warn_uses_generic_sink_level():
    """Warnings have no dedicated system-log level and share the unspecified one."""
    assert sink_level(Severity.WARN) == SINK_DEFAULT
    assert sink_level(None) == SINK_DEFAULT
    assert logging.getLevelName(SINK_DEFAULT) == "DEFAULT"


def test_sink_levels_for_dedicated_severities():
    assert sink_level(Severity.DEBUG) == logging.DEBUG
    assert sink_level(Severity.INFO) == logging.INFO
    assert sink_level(Severity.ERROR) == logging.ERROR
    assert sink_level(Severity.FAULT) == logging.CRITICAL


def test_sink_level_ordering_matches_severity_ordering():
    levels = [sink_level(s) for s in Severity]
    assert levels == sorted(levels)


@pytest.mark.parametrize("raw, expected", [
    ("debug", Severity.DEBUG),
    (" Info ", Severity.INFO),
    ("WARNING", Severity.WARN),
    ("warn", Severity.WARN),
    ("critical", Severity.FAULT),
    ("fault", Severity.FAULT),
])
def test_parse_severity(raw, expected):
    assert parse_severity(raw) == expected


def test_parse_severity_falls_back_to_default():
    assert parse_severity("") == Severity.INFO
    assert parse_severity("verbose", default=Severity.ERROR) == Severity.ERROR
