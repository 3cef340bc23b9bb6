"""Command-line interface for pdfshrink."""

from __future__ import annotations

import sys
from pathlib import Path

# Fix Windows console encoding for Unicode output
if sys.platform == "win32":
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    if hasattr(sys.stderr, "reconfigure"):
        sys.stderr.reconfigure(encoding="utf-8", errors="replace")

import click
from click import Context
from loguru import logger

from pdfshrink.cli import ui
from pdfshrink.cli.logging_config import print_version, setup_logging
from pdfshrink.config import ConfigManager
from pdfshrink.constants import CONFIG_FILENAME
from pdfshrink.engine import ProcessExecutor, SubprocessExecutor, find_engine
from pdfshrink.exceptions import ConfigFileError, MutuallyExclusiveOptionsError
from pdfshrink.placement import placement_from_flags
from pdfshrink.runner import FileOutcome, FileStatus, RunSettings, shrink_all

EXCLUSIVE_OPTIONS_NOTE = (
    "The options --inplace, --rename and --subdir are mutually exclusive."
)


def _get_executor(ctx: Context) -> ProcessExecutor:
    """Return the executor injected through ``ctx.obj``, or a real one."""
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    return obj.get("executor") or SubprocessExecutor()


def _report_outcome(outcome: FileOutcome) -> None:
    if outcome.status == FileStatus.DRY_RUN and outcome.command is not None:
        ui.command_line(outcome.command.display)
    elif outcome.status == FileStatus.SUCCEEDED:
        ui.success(outcome)


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=EXCLUSIVE_OPTIONS_NOTE,
)
@click.argument(
    "inputs",
    metavar="INPUT...",
    nargs=-1,
    required=True,
    type=click.Path(path_type=Path),
)
@click.option(
    "--dry-run",
    "-n",
    is_flag=True,
    help="Do not actually run the commands, just show them.",
)
@click.option(
    "--inplace",
    "-i",
    is_flag=True,
    help="Replace the original file.",
)
@click.option(
    "--rename",
    "-r",
    is_flag=True,
    help="Save the output to a renamed file: *.pdf -> *.shrunk.pdf (default).",
)
@click.option(
    "--subdir",
    "-d",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    metavar="DIR",
    help="Save the output in DIR, creating it if needed.",
)
@click.option(
    "--verbose",
    "-v",
    "verbosity",
    count=True,
    help="Increase the level of verbosity (repeatable).",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to configuration file.",
)
@click.option(
    "--debug",
    is_flag=True,
    hidden=True,
    help="Debug the command line.",
)
@click.option(
    "--version",
    "-V",
    is_flag=True,
    callback=print_version,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.pass_context
def app(
    ctx: Context,
    inputs: tuple[Path, ...],
    dry_run: bool,
    inplace: bool,
    rename: bool,
    subdir: Path | None,
    verbosity: int,
    config_path: Path | None,
    debug: bool,
) -> None:
    """Shrink PDF files using Ghostscript.

    Embedded images are downsampled to 135 dpi, which mostly helps with
    scanned documents. Ghostscript must be installed.

    \b
    Examples:
        pdfshrink scan.pdf                 # writes scan.shrunk.pdf
        pdfshrink -d small *.pdf           # writes small/<name>.pdf
        pdfshrink -i scan.pdf              # replaces scan.pdf
        pdfshrink -n -v scan.pdf           # show the gs command only
    """
    try:
        config_manager = ConfigManager()
        cfg = config_manager.load(config_path=config_path)
    except ConfigFileError as e:
        raise click.BadParameter(str(e), param_hint="'--config'") from e

    try:
        mode = placement_from_flags(
            inplace=inplace,
            rename=rename,
            subdir=subdir,
            suffix=cfg.output.suffix,
        )
    except MutuallyExclusiveOptionsError as e:
        raise click.UsageError(f"{e}.", ctx=ctx) from e

    if debug:
        verbosity = max(verbosity, 1)

    try:
        setup_logging(
            verbosity=verbosity,
            log_dir=cfg.log.dir,
            log_level=cfg.log.level,
            rotation=cfg.log.rotation,
            retention=cfg.log.retention,
        )
    except OSError as e:
        raise click.UsageError(f"Cannot set up log directory {cfg.log.dir}: {e}") from e
    except ValueError as e:
        # loguru rejects rotation/retention values it cannot parse
        error = ConfigFileError(
            config_manager.config_path or Path(CONFIG_FILENAME), f"log: {e}"
        )
        raise click.BadParameter(str(error), param_hint="'--config'") from e

    if config_manager.config_path:
        logger.debug(f"[Config] Loaded from: {config_manager.config_path}")

    settings = RunSettings(
        dry_run=dry_run,
        engine=find_engine(cfg.engine.command),
    )

    if debug:
        logger.debug(f"inputs: {[str(p) for p in inputs]}")
        logger.debug(
            f"inplace={inplace} rename={rename} subdir={subdir} dry_run={dry_run}"
        )
        logger.debug(f"output mode: {mode.describe()}")
        logger.debug(f"engine: {settings.engine}")

    report = shrink_all(
        inputs,
        mode,
        settings,
        _get_executor(ctx),
        on_outcome=_report_outcome,
    )

    if not report.ok:
        ui.failure_summary(report)
        ctx.exit(1)
