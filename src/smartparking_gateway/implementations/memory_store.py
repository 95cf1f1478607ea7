"""In-process key-value store."""

from __future__ import annotations

from collections.abc import Mapping

from smartparking_gateway.protocols import KeyValueStoreProtocol


class InMemoryKeyValueStore(KeyValueStoreProtocol):
    """Dictionary-backed store; contents are lost with the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value

    def clear(self, key: str) -> None:
        self._data.pop(key, None)

    def update(self, values: Mapping[str, str | None]) -> None:
        for key, value in values.items():
            if value is None:
                self._data.pop(key, None)
            else:
                self._data[key] = value

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)
