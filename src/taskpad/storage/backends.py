"""Key-value stores backing task persistence."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Protocol

from taskpad.core.config import DATA_DIRNAME, default_config_dir

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(Protocol):
    """Minimal string store. Implementations may raise ``OSError``."""

    def load(self, key: str) -> str | None:
        ...

    def save(self, key: str, value: str) -> None:
        ...


class FileKeyValueStore:
    """Stores each key as a file under ``root``."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = root or default_config_dir() / DATA_DIRNAME

    def load(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def save(self, key: str, value: str) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_name(f"{path.name}.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key '{key}'")
        return self.root / key


class MemoryKeyValueStore:
    """Process-local store used for ephemeral runs and tests."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> str | None:
        return self.data.get(key)

    def save(self, key: str, value: str) -> None:
        self.data[key] = value


__all__ = ["FileKeyValueStore", "KeyValueStore", "MemoryKeyValueStore"]
