"""JSON file backed key-value store.

Keeps the session across process restarts, the way a browser keeps
localStorage between page loads.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from smartparking_gateway.logging_utils import create_gateway_logger
from smartparking_gateway.protocols import KeyValueStoreProtocol

logger = create_gateway_logger("smartparking_gateway.file_store")


class JsonFileKeyValueStore(KeyValueStoreProtocol):
    """Stores all keys in one JSON object on disk.

    Every write rewrites the file through a temporary sibling and an atomic
    rename, so a crash never leaves a half-written session file.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def read(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def write(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def clear(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def update(self, values: Mapping[str, str | None]) -> None:
        data = self._load()
        for key, value in values.items():
            if value is None:
                data.pop(key, None)
            else:
                data[key] = value
        self._save(data)

    def _load(self) -> dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning(
                "Session file unreadable, treating as empty",
                path=str(self._path),
                error=str(exc),
            )
            return {}

        if isinstance(data, dict):
            return data
        return {}

    def _save(self, data: dict[str, object]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp_path.replace(self._path)
