"""Per-file shrink pipeline and batch processing.

Each input file goes through resolve -> build -> dry-print or run, and ends
in exactly one terminal status. Files are processed sequentially and a
failure for one file never stops the batch.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from loguru import logger

from pdfshrink.atomic import copy_mode, discard, replace_with_retry
from pdfshrink.constants import DEFAULT_ENGINE
from pdfshrink.engine import ProcessExecutor, ShrinkCommand, build_command
from pdfshrink.exceptions import (
    EngineExitError,
    EngineOutputMissingError,
    EngineSpawnError,
    FileError,
    NamingCollisionError,
)
from pdfshrink.placement import (
    InPlace,
    PlacementMode,
    check_input,
    ensure_output_dir,
    resolve_output,
    work_path,
)


class FileStatus(str, Enum):
    """Terminal status of one input file."""

    SUCCEEDED = "succeeded"
    DRY_RUN = "dry_run"
    FAILED = "failed"
    RESOLUTION_ERROR = "resolution_error"


@dataclass(frozen=True, slots=True)
class RunSettings:
    """Settings shared by every file of a batch."""

    dry_run: bool = False
    engine: str = DEFAULT_ENGINE


@dataclass
class FileOutcome:
    """Result of processing one input file."""

    input_path: Path
    status: FileStatus
    output_path: Path | None = None
    command: ShrinkCommand | None = None
    exit_code: int | None = None
    error: FileError | None = None
    input_size: int | None = None
    output_size: int | None = None

    @property
    def ok(self) -> bool:
        return self.status in (FileStatus.SUCCEEDED, FileStatus.DRY_RUN)

    @property
    def saved_ratio(self) -> float | None:
        """Fraction of the input size saved, if both sizes are known."""
        if not self.input_size or self.output_size is None:
            return None
        return 1 - self.output_size / self.input_size


@dataclass
class BatchReport:
    """Outcomes of a batch, in input order."""

    outcomes: list[FileOutcome] = field(default_factory=list)

    def add(self, outcome: FileOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def failures(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def succeeded(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if o.status == FileStatus.SUCCEEDED]

    @property
    def ok(self) -> bool:
        return not self.failures


def _log_engine_output(stdout: str, stderr: str, failed: bool) -> None:
    if stdout.strip():
        logger.debug(f"STDOUT:\n{stdout.rstrip()}")
    if stderr.strip():
        if failed:
            logger.warning(f"STDERR:\n{stderr.rstrip()}")
        else:
            logger.debug(f"STDERR:\n{stderr.rstrip()}")


def _claim_output(
    input_path: Path,
    output_path: Path,
    mode: PlacementMode,
    claimed: set[Path] | None,
) -> None:
    """Reserve ``output_path`` so no later file of the batch overwrites it.

    Raises:
        NamingCollisionError: If the output is another input of the batch or
            the output of an earlier file.
    """
    if claimed is None or isinstance(mode, InPlace):
        return
    key = output_path.resolve()
    if key in claimed:
        raise NamingCollisionError(
            input_path,
            output_path,
            f"output {output_path} is already an input or output of this batch",
        )
    claimed.add(key)


def _execute(
    command: ShrinkCommand,
    input_path: Path,
    output_path: Path,
    mode: PlacementMode,
    executor: ProcessExecutor,
) -> None:
    """Run the engine into its work file, then move the result into place.

    Raises:
        FileError: For directory, spawn, exit, missing-output and replace
            failures.
    """
    ensure_output_dir(input_path, mode)

    work = command.output_path
    # Left over from an interrupted run
    discard(work)

    try:
        result = executor.run(command.argv)
    except OSError as e:
        raise EngineSpawnError(input_path, command.program, e) from e

    _log_engine_output(result.stdout, result.stderr, failed=not result.ok)

    if not result.ok:
        discard(work)
        raise EngineExitError(input_path, result.returncode)
    if not work.is_file():
        raise EngineOutputMissingError(input_path, work)

    copy_mode(input_path, work)
    try:
        replace_with_retry(work, output_path)
    except OSError as e:
        discard(work)
        if isinstance(mode, InPlace):
            raise FileError(input_path, f"cannot replace original: {e}") from e
        raise FileError(input_path, f"cannot write {output_path}: {e}") from e
    logger.debug(f"Moved shrunk copy to {output_path}")


def shrink_file(
    input_path: Path,
    mode: PlacementMode,
    settings: RunSettings,
    executor: ProcessExecutor,
    claimed: set[Path] | None = None,
) -> FileOutcome:
    """Shrink a single file.

    Args:
        input_path: PDF to shrink
        mode: Output placement policy
        settings: Dry-run flag and engine program
        executor: Runs the engine command
        claimed: Resolved inputs and outputs already used by the batch;
            the output of this file is added to it

    Returns:
        FileOutcome in a terminal status. Per-file errors are recorded,
        never raised.
    """
    input_path = Path(input_path)
    logger.debug(f"Processing {input_path}")

    try:
        check_input(input_path)
        output_path = resolve_output(input_path, mode)
        _claim_output(input_path, output_path, mode, claimed)
    except FileError as e:
        logger.warning(f"Cannot process {input_path}: {e.message}")
        return FileOutcome(
            input_path=input_path, status=FileStatus.RESOLUTION_ERROR, error=e
        )

    command = build_command(input_path, work_path(output_path), settings.engine)
    logger.debug(command.display)

    if settings.dry_run:
        return FileOutcome(
            input_path=input_path,
            status=FileStatus.DRY_RUN,
            output_path=output_path,
            command=command,
        )

    input_size = input_path.stat().st_size
    logger.info(f"Compressing {input_path} -> {output_path}")

    try:
        _execute(command, input_path, output_path, mode, executor)
    except FileError as e:
        logger.error(f"Failed to shrink {input_path}: {e.message}")
        return FileOutcome(
            input_path=input_path,
            status=FileStatus.FAILED,
            output_path=output_path,
            command=command,
            exit_code=getattr(e, "exit_code", None),
            error=e,
            input_size=input_size,
        )

    return FileOutcome(
        input_path=input_path,
        status=FileStatus.SUCCEEDED,
        output_path=output_path,
        command=command,
        exit_code=0,
        input_size=input_size,
        output_size=output_path.stat().st_size,
    )


def shrink_all(
    inputs: Iterable[Path],
    mode: PlacementMode,
    settings: RunSettings,
    executor: ProcessExecutor,
    on_outcome: Callable[[FileOutcome], None] | None = None,
) -> BatchReport:
    """Shrink every input in order.

    An output that would overwrite any input of the batch, or the output of
    an earlier file, is a naming collision for the file producing it.

    Args:
        inputs: Files to shrink
        mode: Output placement policy
        settings: Shared run settings
        executor: Runs the engine command
        on_outcome: Called with each outcome as soon as its file is done

    Returns:
        BatchReport with one outcome per input.
    """
    paths = [Path(p) for p in inputs]
    claimed = {p.resolve() for p in paths}
    report = BatchReport()
    for input_path in paths:
        outcome = shrink_file(input_path, mode, settings, executor, claimed)
        report.add(outcome)
        if on_outcome is not None:
            on_outcome(outcome)

    logger.debug(
        f"Batch complete: {len(report.outcomes) - len(report.failures)}"
        f"/{len(report.outcomes)} ok"
    )
    return report
