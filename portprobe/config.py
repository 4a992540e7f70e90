from __future__ import annotations

from pathlib import Path
import threading
from typing import Optional, Dict

from pydantic import BaseModel, Field
import yaml


class StoreFile(BaseModel):
    """On-disk layout of the config store."""

    values: Dict[str, str] = Field(default_factory=dict)


class ConfigStore:
    """String key/value store with optional YAML persistence.

    One instance is created by the caller and handed to whatever needs it
    (CLI commands, the HTTP app); access is serialized with a lock since the
    HTTP server may answer from several threads.
    """

    def __init__(self, values: Optional[Dict[str, str]] = None, path: Optional[Path] = None):
        self.path = Path(path) if path else None
        self._values: Dict[str, str] = dict(values or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> str:
        _check_str("key", key)
        with self._lock:
            return self._values.get(key, "")

    def set(self, key: str, value: str) -> None:
        _check_str("key", key)
        _check_str("value", value)
        with self._lock:
            self._values[key] = value
            if self.path:
                self._save()

    def as_dict(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._values)

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = StoreFile(values=self._values).model_dump(mode="python")
        with self.path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=True)


def _check_str(name: str, value: object) -> None:
    if not isinstance(value, str):
        raise TypeError(f"config {name} must be a string, got {type(value).__name__}")


def load_store(path: Optional[Path]) -> ConfigStore:
    """Load store from YAML path if provided and present, else return an empty store."""
    if not path:
        return ConfigStore()
    p = Path(path)
    if not p.exists():
        return ConfigStore(path=p)
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return ConfigStore(values=StoreFile.model_validate(data).values, path=p)
