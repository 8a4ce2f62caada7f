from __future__ import annotations

"""
Demonstration CLI.

Emits one sample message per severity so the console and system-log layouts
can be inspected under different configuration flags.
"""

import argparse
import logging
from typing import List, Optional

from catlog.config import LogConfig, configure
from catlog.errors import CatlogError
from catlog.levels import Severity, parse_severity
from catlog.logger import Log

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Demo"


# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the catlog demo.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="catlog",
        description="Emit sample log lines at every severity.",
    )

    # --- Routing ---
    p.add_argument(
        "--console",
        action="store_true",
        help="Print to stdout instead of the system log.",
    )
    p.add_argument(
        "--subsystem",
        default=None,
        help="System-log subsystem identifier.",
    )
    p.add_argument(
        "--level",
        default="debug",
        help="Lowest severity to emit (debug, info, warn, error, fault).",
    )

    # --- Decoration ---
    p.add_argument(
        "--no-timestamps",
        action="store_true",
        help="Omit the timestamp prefix.",
    )
    p.add_argument(
        "--relative",
        action="store_true",
        help="Show seconds since start instead of wall-clock time.",
    )
    p.add_argument(
        "--stacktraces",
        action="store_true",
        help="Append the call stack to errors and faults.",
    )
    p.add_argument(
        "-c", "--category",
        default=DEFAULT_CATEGORY,
        help="Category shown in brackets.",
    )
    p.add_argument(
        "-m", "--message",
        default=None,
        help="Message text; defaults to '<level> text'.",
    )
    return p


def config_from_args(args: argparse.Namespace) -> LogConfig:
    """Translate parsed arguments into an independent configuration."""
    cfg = LogConfig(
        subsystem=args.subsystem,
        min_level=parse_severity(args.level, default=Severity.DEBUG),
    )
    return configure(
        args.console,
        not args.no_timestamps,
        args.stacktraces,
        use_absolute_timestamps=not args.relative,
        config=cfg,
    )


# -----------------------------------------------------------------------------
# ENTRYPOINT
# -----------------------------------------------------------------------------

def run_demo(log: Log, message: Optional[str] = None) -> None:
    """Emit one message per severity through `log`."""
    log.debug(message or "debug text")
    log.info(message or "info text")
    log.warn(message or "warn text")
    log.error(message or "error text")
    log.fault(message or "fault text")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments and emit the sample messages.

    Returns:
        int: Process exit code.
    """
    args = build_parser().parse_args(argv)
    cfg = config_from_args(args)

    try:
        log = Log(args.category, config=cfg)
    except CatlogError as e:
        logger.error("Cannot start logging: %s", e)
        print(f"ERROR: {e}")
        return 2

    run_demo(log, args.message)
    return 0
