# ABOUTME: Persisted key-value cells for the last selected location and model.
# ABOUTME: In-memory store for tests and embedding, JSON-file store for a persistent process.

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

LOCATION_KEY = "tnradar_location"
MODEL_KEY = "tnradar_model"


@runtime_checkable
class KeyValueStore(Protocol):
    """String-keyed, string-valued, last-write-wins storage."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """Keeps all keys in one JSON object on disk, rewritten on every set."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("State file %s is not valid JSON, starting empty", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("State file %s does not hold an object, starting empty", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
