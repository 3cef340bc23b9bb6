"""Unit tests for CLI logging setup."""

from __future__ import annotations

from pathlib import Path

import pytest
from loguru import logger

from pdfshrink.cli.logging_config import console_level, setup_logging


class TestConsoleLevel:
    """Tests for -v count to level mapping."""

    @pytest.mark.parametrize(
        ("verbosity", "level"),
        [(-1, "INFO"), (0, "INFO"), (1, "DEBUG"), (2, "TRACE"), (5, "TRACE")],
    )
    def test_levels(self, verbosity: int, level: str) -> None:
        assert console_level(verbosity) == level


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_only(self) -> None:
        handler_id, log_file = setup_logging(verbosity=0)

        assert isinstance(handler_id, int)
        assert log_file is None

    def test_info_hides_debug(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(verbosity=0)
        logger.debug("hidden command line")
        logger.info("Compressing a.pdf")

        err = capsys.readouterr().err
        assert "hidden command line" not in err
        assert "Compressing a.pdf" in err

    def test_verbose_shows_debug(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(verbosity=1)
        logger.debug("gs -q -dBATCH")
        logger.trace("resolve trace")

        err = capsys.readouterr().err
        assert "gs -q -dBATCH" in err
        assert "resolve trace" not in err

    def test_very_verbose_shows_trace(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(verbosity=2)
        logger.trace("resolve trace")

        assert "resolve trace" in capsys.readouterr().err

    def test_log_file(self, tmp_path: Path) -> None:
        log_dir = tmp_path / "logs"
        _, log_file = setup_logging(verbosity=0, log_dir=str(log_dir))

        logger.debug("written to file only")
        logger.remove()

        assert log_file is not None
        assert log_file.parent == log_dir
        assert log_file.name.startswith("pdfshrink_")
        assert "written to file only" in log_file.read_text(encoding="utf-8")

    def test_replaces_previous_handlers(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        setup_logging(verbosity=0)
        setup_logging(verbosity=0)
        logger.info("once")

        assert capsys.readouterr().err.count("once") == 1
