"""Configuration management for pdfshrink."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from pdfshrink.constants import (
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOG_RETENTION,
    DEFAULT_LOG_ROTATION,
    DEFAULT_RENAME_SUFFIX,
    LOG_DIR_ENV_VAR,
    LOG_LEVELS,
)
from pdfshrink.exceptions import ConfigFileError


class EngineConfig(BaseModel):
    """Ghostscript configuration."""

    command: str | None = None  # None = auto-detect on PATH


class OutputConfig(BaseModel):
    """Output placement configuration."""

    suffix: str = DEFAULT_RENAME_SUFFIX

    @field_validator("suffix")
    @classmethod
    def _check_suffix(cls, value: str) -> str:
        value = value.strip().strip(".")
        if not value:
            raise ValueError("suffix must not be empty")
        if "/" in value or "\\" in value:
            raise ValueError("suffix must not contain path separators")
        return value


class LogConfig(BaseModel):
    """Log file configuration."""

    dir: str | None = None
    level: str = DEFAULT_LOG_LEVEL
    rotation: str = DEFAULT_LOG_ROTATION
    retention: str = DEFAULT_LOG_RETENTION

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"unknown log level {value!r}, expected one of {', '.join(LOG_LEVELS)}"
            )
        return level


class PdfShrinkConfig(BaseModel):
    """Root configuration model."""

    engine: EngineConfig = Field(default_factory=EngineConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    log: LogConfig = Field(default_factory=LogConfig)


class ConfigManager:
    """Configuration manager for locating and loading config files."""

    CONFIG_FILENAME = CONFIG_FILENAME
    DEFAULT_USER_CONFIG_DIR = Path.home() / ".pdfshrink"

    def __init__(self) -> None:
        self._config_path: Path | None = None

    @property
    def config_path(self) -> Path | None:
        """Get the path of the loaded configuration file."""
        return self._config_path

    def load(self, config_path: Path | str | None = None) -> PdfShrinkConfig:
        """
        Load configuration from file with fallback chain.

        Priority (highest to lowest):
        1. Explicit config_path parameter
        2. PDFSHRINK_CONFIG environment variable
        3. ./pdfshrink.json (current directory)
        4. ~/.pdfshrink/config.json (user directory)
        5. Default values

        Raises:
            ConfigFileError: If the file is missing (when given explicitly),
                is not valid JSON, or does not match the schema.
        """
        config_data: dict[str, Any] = {}
        self._config_path = None

        resolved_path = self._resolve_config_path(config_path)
        if resolved_path is not None:
            config_data = self._load_json(resolved_path)
            self._config_path = resolved_path

        try:
            config = PdfShrinkConfig.model_validate(config_data)
        except ValidationError as e:
            raise ConfigFileError(
                resolved_path or Path(self.CONFIG_FILENAME), _first_error(e)
            ) from e

        env_log_dir = os.environ.get(LOG_DIR_ENV_VAR)
        if env_log_dir:
            config.log.dir = env_log_dir

        return config

    def _resolve_config_path(self, config_path: Path | str | None) -> Path | None:
        """Resolve configuration file path based on priority."""
        # 1. Explicit path
        if config_path:
            return Path(config_path)

        # 2. Environment variable
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path)

        # 3. Current directory
        cwd_config = Path.cwd() / self.CONFIG_FILENAME
        if cwd_config.exists():
            return cwd_config

        # 4. User directory
        user_config = self.DEFAULT_USER_CONFIG_DIR / "config.json"
        if user_config.exists():
            return user_config

        return None

    def _load_json(self, path: Path) -> dict[str, Any]:
        """Load JSON configuration file."""
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigFileError(path, e.strerror or str(e)) from e
        except json.JSONDecodeError as e:
            raise ConfigFileError(path, f"line {e.lineno}: {e.msg}") from e

        if not isinstance(data, dict):
            raise ConfigFileError(path, "top-level value must be an object")
        return data


def _first_error(error: ValidationError) -> str:
    """Format the first pydantic error as ``field.path: message``."""
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message
