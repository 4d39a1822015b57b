from __future__ import annotations

from typing import Any, Dict, Mapping, Sequence

from profilesync.storage.base import KeyValueStore


class InMemoryStore(KeyValueStore):
    """Process-local scope backed by a dict."""

    def __init__(self, name: str = "memory") -> None:
        self.name = name
        self._data: Dict[str, Any] = {}

    async def get(self, keys: Sequence[str]) -> Dict[str, Any]:
        return {key: self._data[key] for key in keys if key in self._data}

    async def set(self, items: Mapping[str, Any]) -> None:
        self._data.update(items)

    async def remove(self, keys: Sequence[str]) -> None:
        for key in keys:
            self._data.pop(key, None)

    def snapshot(self) -> Dict[str, Any]:
        return dict(self._data)
