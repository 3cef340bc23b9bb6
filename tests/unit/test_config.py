"""Unit tests for configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pdfshrink.config import ConfigManager, LogConfig, OutputConfig, PdfShrinkConfig
from pdfshrink.exceptions import ConfigError, ConfigFileError


@pytest.fixture
def manager(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ConfigManager:
    """ConfigManager isolated from the real cwd, home and environment."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PDFSHRINK_CONFIG", raising=False)
    monkeypatch.delenv("PDFSHRINK_LOG_DIR", raising=False)
    monkeypatch.setattr(
        ConfigManager, "DEFAULT_USER_CONFIG_DIR", tmp_path / "home" / ".pdfshrink"
    )
    return ConfigManager()


class TestDefaults:
    """Tests for default configuration values."""

    def test_defaults(self) -> None:
        cfg = PdfShrinkConfig()
        assert cfg.engine.command is None
        assert cfg.output.suffix == "shrunk"
        assert cfg.log.dir is None
        assert cfg.log.level == "DEBUG"

    def test_no_file_uses_defaults(self, manager: ConfigManager) -> None:
        cfg = manager.load()
        assert cfg == PdfShrinkConfig()
        assert manager.config_path is None


class TestSuffixValidation:
    """Tests for the rename suffix validator."""

    def test_strips_dots(self) -> None:
        assert OutputConfig(suffix=".small.").suffix == "small"

    @pytest.mark.parametrize("bad", ["", ".", "a/b", "a\\b"])
    def test_rejects(self, bad: str) -> None:
        with pytest.raises(ValueError):
            OutputConfig(suffix=bad)


class TestLogLevelValidation:
    """Tests for the log level validator."""

    def test_normalises_case(self) -> None:
        assert LogConfig(level=" info ").level == "INFO"

    @pytest.mark.parametrize("level", ["TRACE", "SUCCESS", "CRITICAL"])
    def test_accepts_loguru_levels(self, level: str) -> None:
        assert LogConfig(level=level).level == level

    def test_rejects_unknown(self) -> None:
        with pytest.raises(ValueError, match="unknown log level"):
            LogConfig(level="LOUD")


class TestLoad:
    """Tests for ConfigManager.load resolution order."""

    def test_explicit_path(self, manager: ConfigManager, tmp_path: Path) -> None:
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"engine": {"command": "/opt/gs"}}))

        cfg = manager.load(config_path=path)

        assert cfg.engine.command == "/opt/gs"
        assert manager.config_path == path

    def test_env_var(
        self,
        manager: ConfigManager,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        path = tmp_path / "env.json"
        path.write_text(json.dumps({"output": {"suffix": "env"}}))
        monkeypatch.setenv("PDFSHRINK_CONFIG", str(path))

        assert manager.load().output.suffix == "env"

    def test_cwd_file(self, manager: ConfigManager, tmp_path: Path) -> None:
        (tmp_path / "pdfshrink.json").write_text(
            json.dumps({"output": {"suffix": "cwd"}})
        )
        assert manager.load().output.suffix == "cwd"

    def test_user_file(self, manager: ConfigManager) -> None:
        user_dir = ConfigManager.DEFAULT_USER_CONFIG_DIR
        user_dir.mkdir(parents=True)
        (user_dir / "config.json").write_text(json.dumps({"output": {"suffix": "home"}}))

        assert manager.load().output.suffix == "home"

    def test_explicit_beats_cwd(self, manager: ConfigManager, tmp_path: Path) -> None:
        (tmp_path / "pdfshrink.json").write_text(
            json.dumps({"output": {"suffix": "cwd"}})
        )
        explicit = tmp_path / "explicit.json"
        explicit.write_text(json.dumps({"output": {"suffix": "explicit"}}))

        assert manager.load(config_path=explicit).output.suffix == "explicit"

    def test_log_dir_env_override(
        self,
        manager: ConfigManager,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("PDFSHRINK_LOG_DIR", str(tmp_path / "logs"))
        assert manager.load().log.dir == str(tmp_path / "logs")


class TestLoadErrors:
    """Tests for invalid configuration files."""

    def test_missing_explicit_file(self, manager: ConfigManager, tmp_path: Path) -> None:
        with pytest.raises(ConfigFileError):
            manager.load(config_path=tmp_path / "missing.json")

    def test_invalid_json(self, manager: ConfigManager, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        with pytest.raises(ConfigFileError) as exc_info:
            manager.load(config_path=path)
        assert exc_info.value.path == path
        assert "line 1" in str(exc_info.value)

    def test_non_object(self, manager: ConfigManager, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[]")

        with pytest.raises(ConfigFileError, match="object"):
            manager.load(config_path=path)

    def test_schema_error_names_field(
        self, manager: ConfigManager, tmp_path: Path
    ) -> None:
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"output": {"suffix": "a/b"}}))

        with pytest.raises(ConfigFileError, match="output.suffix"):
            manager.load(config_path=path)

    def test_is_config_error(self) -> None:
        assert issubclass(ConfigFileError, ConfigError)

    def test_unknown_log_level_names_field(
        self, manager: ConfigManager, tmp_path: Path
    ) -> None:
        path = tmp_path / "level.json"
        path.write_text(json.dumps({"log": {"level": "LOUD"}}))

        with pytest.raises(ConfigFileError, match="log.level"):
            manager.load(config_path=path)
