"""Pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path

import pytest
from loguru import logger

from pdfshrink.cli.console import reset_consoles
from pdfshrink.constants import OUTPUT_FILE_FLAG
from pdfshrink.engine import ProcessResult

SAMPLE_PDF_BYTES = b"%PDF-1.4\n" + b"0" * 4096 + b"\n%%EOF\n"
SHRUNK_PDF_BYTES = b"%PDF-1.4\nshrunk\n%%EOF\n"


# =============================================================================
# Engine Fixtures
# =============================================================================


class FakeExecutor:
    """Stand-in for Ghostscript.

    Records every argument vector. By default it writes a small PDF to the
    ``-sOutputFile=`` path and exits 0. Inputs listed in ``fail_for`` exit
    with the given status after writing a truncated file; inputs listed in
    ``spawn_error_for`` raise like a missing executable.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.fail_for: dict[str, int] = {}
        self.spawn_error_for: set[str] = set()
        self.write_output = True
        self.output_bytes = SHRUNK_PDF_BYTES

    def run(self, argv: Sequence[str]) -> ProcessResult:
        argv = list(argv)
        self.calls.append(argv)
        input_name = Path(argv[-1]).name
        output = next(
            Path(a[len(OUTPUT_FILE_FLAG) :])
            for a in argv
            if a.startswith(OUTPUT_FILE_FLAG)
        )

        if input_name in self.spawn_error_for:
            raise FileNotFoundError(2, "No such file or directory", argv[0])

        if input_name in self.fail_for:
            output.write_bytes(b"%PDF-1.4\npartial")
            return ProcessResult(
                returncode=self.fail_for[input_name],
                stderr="Error: /syntaxerror in pdf\n",
            )

        if self.write_output:
            output.write_bytes(self.output_bytes)
        return ProcessResult(returncode=0)

    def outputs(self) -> list[Path]:
        """Output paths of all recorded calls."""
        return [
            Path(a[len(OUTPUT_FILE_FLAG) :])
            for argv in self.calls
            for a in argv
            if a.startswith(OUTPUT_FILE_FLAG)
        ]


@pytest.fixture
def fake_executor() -> FakeExecutor:
    """Return a fake process executor."""
    return FakeExecutor()


# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def sample_pdf(tmp_path: Path) -> Path:
    """Create a sample PDF file."""
    path = tmp_path / "scan.pdf"
    path.write_bytes(SAMPLE_PDF_BYTES)
    return path


@pytest.fixture
def make_pdf(tmp_path: Path):
    """Return a factory creating PDF files under tmp_path."""

    def _make(name: str, content: bytes = SAMPLE_PDF_BYTES) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _make


# =============================================================================
# CLI Fixtures
# =============================================================================


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Capture loguru messages at every level."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda m: messages.append(m.record["message"]), level="TRACE"
    )
    yield messages
    try:
        logger.remove(handler_id)
    except ValueError:
        pass


@pytest.fixture(autouse=True)
def _reset_output() -> Iterator[None]:
    """Drop handlers and consoles bound to streams of a finished test."""
    yield
    logger.remove()
    reset_consoles()
