"""Output helpers for the pdfshrink CLI.

Command lines are printed verbatim (no markup, no wrapping) so they can be
copied into a shell. Everything else goes through Rich markup with user
supplied text escaped.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from pdfshrink.cli.console import get_console, get_stderr_console
from pdfshrink.runner import BatchReport, FileOutcome

MARK_SUCCESS = "✓"  # Checkmark
MARK_ERROR = "✗"  # Cross
MARK_LINE = "│"  # Vertical line


def format_size(size_bytes: int) -> str:
    """Format size in human-readable format."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.2f} MB"


def command_line(text: str, *, console: Console | None = None) -> None:
    """Print a shell command exactly as given."""
    c = console or get_console()
    c.print(text, markup=False, highlight=False, soft_wrap=True)


def success(outcome: FileOutcome, *, console: Console | None = None) -> None:
    """Display one shrunk file with its size change."""
    c = console or get_console()
    text = f"{escape(str(outcome.input_path))} -> {escape(str(outcome.output_path))}"
    if outcome.input_size is not None and outcome.output_size is not None:
        text += (
            f" [dim]({format_size(outcome.input_size)} -> "
            f"{format_size(outcome.output_size)}"
        )
        ratio = outcome.saved_ratio
        if ratio is not None:
            text += f", {-ratio:+.0%}"
        text += ")[/]"
    c.print(f"[green]{MARK_SUCCESS}[/] {text}", soft_wrap=True)


def failure_summary(report: BatchReport, *, console: Console | None = None) -> None:
    """Print every failed file and its reason to stderr."""
    failures = report.failures
    if not failures:
        return
    c = console or get_stderr_console()
    c.print(
        f"[red]{len(failures)} of {len(report.outcomes)} file(s) failed:[/]",
        soft_wrap=True,
    )
    for outcome in failures:
        c.print(f"  [red]{MARK_ERROR}[/] {escape(str(outcome.input_path))}", soft_wrap=True)
        if outcome.error is not None:
            c.print(f"    [dim]{MARK_LINE} {escape(outcome.error.message)}[/]", soft_wrap=True)
