"""Configuration management for Taskpad."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Callable
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w
import typer
from pydantic import BaseModel, Field, ValidationError


def default_config_dir() -> Path:
    return Path(os.environ.get("TASKPAD_HOME", Path.home() / ".taskpad"))


CONFIG_FILENAME = "config.toml"
DATA_DIRNAME = "data"


class ConfigurationError(RuntimeError):
    """Raised when configuration loading fails."""


class TaskpadConfig(BaseModel):
    """Persisted Taskpad configuration settings."""

    config_version: int = 1
    data_dir: str | None = None
    flush_on_exit: bool = True
    activity_log_size: int = Field(default=200, ge=1)
    show_progress: bool = True


@dataclass
class ConfigContext:
    """Represents a loaded configuration and the resolved storage location."""

    config: TaskpadConfig
    data_dir: Path


class ConfigManager:
    """Handles loading, merging, and persisting Taskpad configuration."""

    def __init__(
        self,
        config_dir: Path | None = None,
        echo_fn: Callable[[str], None] | None = None,
        project_config_path: Path | None = None,
        override_config_path: Path | None = None,
    ) -> None:
        self.config_dir = config_dir or default_config_dir()
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_path = self.config_dir / CONFIG_FILENAME
        self._echo = echo_fn or typer.echo
        self.project_config_path = project_config_path
        self.override_config_path = override_config_path

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def ensure(self, *, data_dir: Path | None = None) -> ConfigContext:
        """Ensure a base config file exists; return the merged context."""

        if not self.config_path.exists():
            self._save_config(TaskpadConfig())
            self._echo("✅ Taskpad configuration saved to " + str(self.config_path))
        config = self._load_config()
        return ConfigContext(config=config, data_dir=self.resolve_data_dir(config, data_dir))

    def resolve_data_dir(self, config: TaskpadConfig, override: Path | None = None) -> Path:
        if override is not None:
            return override.expanduser()
        if config.data_dir:
            candidate = Path(config.data_dir).expanduser()
            if not candidate.is_absolute():
                candidate = self.config_dir / candidate
            return candidate
        return self.config_dir / DATA_DIRNAME

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _load_config(self) -> TaskpadConfig:
        data: dict[str, Any] = self._read_config_dict(self.config_path)
        if self.project_config_path:
            data = self._merge_dicts(data, self._read_config_dict(self.project_config_path))
        if self.override_config_path:
            data = self._merge_dicts(data, self._read_config_dict(self.override_config_path))
        try:
            return TaskpadConfig(**data)
        except ValidationError as exc:
            raise ConfigurationError(str(exc)) from exc

    def _save_config(self, config: TaskpadConfig) -> None:
        self.config_path.write_text(tomli_w.dumps(config.model_dump(exclude_none=True)))

    def _read_config_dict(self, path: Path | None) -> dict[str, Any]:
        if path is None:
            return {}
        if not path.exists():
            return {}
        try:
            return tomllib.loads(path.read_text())
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigurationError(f"Failed to load config from {path}: {exc}") from exc

    def _merge_dicts(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        result = deepcopy(base)
        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result


__all__ = [
    "CONFIG_FILENAME",
    "ConfigContext",
    "ConfigManager",
    "ConfigurationError",
    "TaskpadConfig",
    "default_config_dir",
]
