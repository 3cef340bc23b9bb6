"""Ghostscript command construction and execution.

The engine is opaque: pdfshrink builds its argument vector, runs it and looks
only at the exit status. Output is captured for logging.
"""

from __future__ import annotations

import shlex
import shutil
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from loguru import logger

from pdfshrink.constants import (
    DEFAULT_ENGINE,
    ENGINE_ARGS,
    ENGINE_CANDIDATES,
    OUTPUT_FILE_FLAG,
)


@dataclass(frozen=True, slots=True)
class ShrinkCommand:
    """A fully assembled engine invocation for one file."""

    program: str
    input_path: Path
    output_path: Path
    options: tuple[str, ...] = ENGINE_ARGS

    @property
    def argv(self) -> list[str]:
        """Argument vector handed to the process executor."""
        return [
            self.program,
            *self.options,
            f"{OUTPUT_FILE_FLAG}{self.output_path}",
            str(self.input_path),
        ]

    @property
    def display(self) -> str:
        """Shell-escaped command line, for display only."""
        return shlex.join(self.argv)


def build_command(
    input_path: Path,
    output_path: Path,
    program: str = DEFAULT_ENGINE,
) -> ShrinkCommand:
    """Build the Ghostscript command that shrinks ``input_path`` into ``output_path``.

    Args:
        input_path: Source PDF
        output_path: File the engine writes
        program: Ghostscript executable

    Returns:
        ShrinkCommand with the fixed downsampling template.
    """
    logger.trace(f"build_command({input_path!s}, {output_path!s})")
    return ShrinkCommand(
        program=program,
        input_path=Path(input_path),
        output_path=Path(output_path),
    )


def find_engine(configured: str | None = None) -> str:
    """Locate the Ghostscript executable.

    Args:
        configured: Program name or path from configuration; wins when set.

    Returns:
        The configured program, else the first candidate found on PATH,
        else ``gs`` (spawning then fails with a clear error).
    """
    if configured:
        return configured

    for candidate in ENGINE_CANDIDATES:
        path = shutil.which(candidate)
        if path:
            logger.trace(f"Found Ghostscript at: {path}")
            return candidate

    logger.debug("Ghostscript not found on PATH, falling back to 'gs'")
    return DEFAULT_ENGINE


@dataclass(frozen=True, slots=True)
class ProcessResult:
    """Exit status and captured output of a finished process."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessExecutor(Protocol):
    """Capability to run a command to completion."""

    def run(self, argv: Sequence[str]) -> ProcessResult:
        """Run ``argv`` and wait for it to exit.

        Raises:
            OSError: If the process cannot be started.
        """
        ...


class SubprocessExecutor:
    """Run commands with ``subprocess.run``, without a shell and without timeout."""

    def run(self, argv: Sequence[str]) -> ProcessResult:
        proc = subprocess.run(
            list(argv),
            capture_output=True,
            text=True,
            errors="replace",
            check=False,
        )
        return ProcessResult(
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )
