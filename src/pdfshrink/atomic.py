"""Atomic file replacement for shrunk outputs."""

from __future__ import annotations

import os
import shutil
import sys
import time
from pathlib import Path

from loguru import logger

# Windows-specific retry settings for file operations
_WINDOWS_RETRY_COUNT = 5
_WINDOWS_RETRY_DELAY = 0.05  # 50ms


def replace_with_retry(src: Path, dst: Path) -> None:
    """Atomically move ``src`` over ``dst``.

    On Windows, os.replace() can fail with PermissionError when the target
    file is briefly locked by another process (antivirus, indexer, a PDF
    viewer). The operation is retried with a growing delay.

    Args:
        src: Freshly written file (same filesystem as ``dst``)
        dst: File to replace
    """
    if sys.platform != "win32":
        os.replace(src, dst)
        return

    last_error: OSError | None = None
    for attempt in range(_WINDOWS_RETRY_COUNT):
        try:
            os.replace(src, dst)
            return
        except PermissionError as e:
            last_error = e
            if attempt < _WINDOWS_RETRY_COUNT - 1:
                time.sleep(_WINDOWS_RETRY_DELAY * (attempt + 1))

    if last_error:
        raise last_error


def discard(path: Path) -> bool:
    """Remove a partial output file if present.

    Returns:
        True if a file was removed.
    """
    for attempt in range(_WINDOWS_RETRY_COUNT if sys.platform == "win32" else 1):
        try:
            path.unlink()
            logger.debug(f"Discarded partial output {path}")
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            if sys.platform == "win32" and attempt < _WINDOWS_RETRY_COUNT - 1:
                time.sleep(_WINDOWS_RETRY_DELAY)
                continue
            logger.warning(f"Cannot remove partial output {path}: {e}")
            return False
    return False


def copy_mode(src: Path, dst: Path) -> None:
    """Give ``dst`` the permission bits of ``src``.

    Failures are logged and ignored; the shrunk file keeps default permissions.
    """
    try:
        shutil.copymode(src, dst)
    except OSError as e:
        logger.debug(f"Cannot copy permissions from {src} to {dst}: {e}")
