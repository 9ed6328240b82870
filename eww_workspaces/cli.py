#!/usr/bin/env python3
"""
eww workspace widget backend

Prints a row of workspace buttons for one monitor as eww yuck markup and
re-prints it on every sway/i3 window or workspace event.

Usage:
    eww-workspaces --monitor DP-1
    eww-workspaces --monitor DP-1 --monitors-file /tmp/monitors.json
    eww-workspaces --monitor DP-1 --command i3-msg     # skip detection

Output: one yuck line per render on stdout (use with deflisten).
Logs go to stderr.

Exit codes:
    0: Graceful shutdown (SIGTERM/SIGINT)
    1: Fatal runtime error (monitor resolution, subscription closed)
    2: Usage error
"""

import argparse
import asyncio
import json
import logging
import os
import signal
import sys
from typing import Iterable, Optional

from .config import DEFAULT_MONITORS_FILE, LOG_LEVEL_ENV, SUPPORTED_COMMANDS, WidgetConfig
from .errors import ConfigError, WorkspacesError
from .runner import run

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setup_logging(level: Optional[str] = None) -> None:
    """Configure logging to stderr (stdout is reserved for markup)."""
    level = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    if level not in LOG_LEVELS:
        level = "INFO"

    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eww-workspaces",
        description="Emit an eww workspace widget for one monitor",
    )
    parser.add_argument(
        "--monitor",
        required=True,
        help="Monitor name to display workspaces for",
    )
    parser.add_argument(
        "--monitors-file",
        default=str(DEFAULT_MONITORS_FILE),
        help=f"Path to monitor JSON file (default: {DEFAULT_MONITORS_FILE})",
    )
    parser.add_argument(
        "--command",
        choices=SUPPORTED_COMMANDS,
        default=None,
        help="Window manager CLI to use instead of auto-detection",
    )
    parser.add_argument(
        "--resolve-timeout",
        type=float,
        default=None,
        help="Seconds to wait for the monitors file at startup (default: 5)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help=f"Log level (default: ${LOG_LEVEL_ENV} or INFO)",
    )
    return parser


async def main_async(monitor: str, monitors_file: str, config: WidgetConfig) -> int:
    """Run the widget with SIGTERM/SIGINT mapped to a clean exit."""
    loop = asyncio.get_running_loop()
    task = asyncio.current_task()
    shutdown_requested = False

    def handle_shutdown_signal(signum: int) -> None:
        nonlocal shutdown_requested
        logger.info(f"Received signal {signum}, shutting down")
        shutdown_requested = True
        task.cancel()

    for signum in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(signum, handle_shutdown_signal, signum)

    try:
        await run(monitor, monitors_file, config)
    except asyncio.CancelledError:
        if not shutdown_requested:
            raise
        task.uncancel()
        return 0
    return 0


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.monitor.strip():
        parser.error("--monitor must not be empty")

    setup_logging(args.log_level)

    # Eww closing the pipe should end the process quietly
    signal.signal(signal.SIGPIPE, signal.SIG_DFL)

    try:
        config = WidgetConfig.build(
            forced_command=args.command,
            resolve_timeout=args.resolve_timeout,
        )
    except ConfigError as e:
        parser.error(e.message)

    try:
        return asyncio.run(main_async(args.monitor, args.monitors_file, config))
    except WorkspacesError as e:
        logger.error(f"Fatal: {e.message}")
        if e.suggestion:
            logger.error(f"  → {e.suggestion}")
        logger.debug(f"Error details: {json.dumps(e.to_dict())}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
