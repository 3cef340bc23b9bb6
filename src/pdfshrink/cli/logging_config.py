"""Logging configuration for the pdfshrink CLI.

Console verbosity follows the number of ``-v`` flags:

- no flag: INFO (one line per file, warnings and errors)
- ``-v``: DEBUG (engine command lines, engine output)
- ``-vv``: TRACE (path resolution and command construction)

A log file is written in addition when a log directory is configured.
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from click import Context
from loguru import logger

from pdfshrink import __version__
from pdfshrink.cli.console import get_console
from pdfshrink.constants import (
    CONSOLE_LOG_FORMAT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOG_RETENTION,
    DEFAULT_LOG_ROTATION,
    FILE_LOG_FORMAT,
    VERBOSITY_LEVELS,
)


def console_level(verbosity: int) -> str:
    """Map a ``-v`` count to a loguru level name."""
    if verbosity < 0:
        verbosity = 0
    return VERBOSITY_LEVELS[min(verbosity, len(VERBOSITY_LEVELS) - 1)]


def setup_logging(
    verbosity: int = 0,
    log_dir: str | None = None,
    log_level: str = DEFAULT_LOG_LEVEL,
    rotation: str = DEFAULT_LOG_ROTATION,
    retention: str = DEFAULT_LOG_RETENTION,
) -> tuple[int, Path | None]:
    """Configure loguru once for the whole run.

    Args:
        verbosity: Number of ``-v`` flags.
        log_dir: Directory for log files. Supports ~ expansion.
        log_level: Log level for file output.
        rotation: Log file rotation size.
        retention: Log file retention period.

    Returns:
        Tuple of (console_handler_id, log_file_path).
        Log file path is None if file logging is disabled.
    """
    logger.remove()

    console_handler_id = logger.add(
        sys.stderr,
        level=console_level(verbosity),
        format=CONSOLE_LOG_FORMAT,
    )

    log_file_path: Path | None = None
    if log_dir:
        log_path = Path(log_dir).expanduser()
        log_path.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        log_file_path = log_path / f"pdfshrink_{timestamp}.log"
        logger.add(
            log_file_path,
            level=log_level,
            rotation=rotation,
            retention=retention,
            format=FILE_LOG_FORMAT,
        )

    return console_handler_id, log_file_path


def print_version(ctx: Context, param: Any, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    get_console().print(f"pdfshrink {__version__}")
    ctx.exit(0)
