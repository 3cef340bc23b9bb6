"""Custom exceptions for pdfshrink."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class PdfShrinkError(Exception):
    """Base exception class for pdfshrink."""

    pass


# =============================================================================
# Configuration errors (fatal, raised before any file is processed)
# =============================================================================


class ConfigError(PdfShrinkError):
    """Invalid invocation or configuration."""

    pass


class MutuallyExclusiveOptionsError(ConfigError):
    """More than one placement option was selected."""

    def __init__(self, options: Sequence[str]) -> None:
        self.options = tuple(options)
        super().__init__(
            f"Options {', '.join(self.options)} are mutually exclusive"
        )


class ConfigFileError(ConfigError):
    """Configuration file could not be read or validated."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"Invalid configuration file {path}: {message}")


# =============================================================================
# Per-file errors (the batch continues with the next file)
# =============================================================================


class FileError(PdfShrinkError):
    """Error scoped to a single input file."""

    def __init__(self, file_path: Path, message: str) -> None:
        self.file_path = file_path
        self.message = message
        super().__init__(f"{file_path}: {message}")


class InputNotFoundError(FileError):
    """Input path does not exist or is not a regular file."""

    def __init__(self, file_path: Path) -> None:
        super().__init__(file_path, "no such file")


class NamingCollisionError(FileError):
    """Computed output path would overwrite an input or an earlier output."""

    def __init__(
        self, file_path: Path, output_path: Path, message: str | None = None
    ) -> None:
        self.output_path = output_path
        super().__init__(
            file_path, message or f"output {output_path} would overwrite the input"
        )


class DirectoryCreationError(FileError):
    """Output directory could not be created."""

    def __init__(self, file_path: Path, directory: Path, cause: OSError) -> None:
        self.directory = directory
        self.cause = cause
        super().__init__(file_path, f"cannot create directory {directory}: {cause}")


class EngineError(FileError):
    """Ghostscript did not produce a shrunk file."""

    pass


class EngineSpawnError(EngineError):
    """Ghostscript could not be started."""

    def __init__(self, file_path: Path, program: str, cause: OSError) -> None:
        self.program = program
        self.cause = cause
        super().__init__(file_path, f"cannot run {program}: {cause}")


class EngineExitError(EngineError):
    """Ghostscript exited with a non-zero status."""

    def __init__(self, file_path: Path, exit_code: int) -> None:
        self.exit_code = exit_code
        super().__init__(file_path, f"engine exited with status {exit_code}")


class EngineOutputMissingError(EngineError):
    """Ghostscript exited successfully but wrote no output file."""

    def __init__(self, file_path: Path, output_path: Path) -> None:
        self.output_path = output_path
        super().__init__(file_path, f"engine wrote no output to {output_path}")
