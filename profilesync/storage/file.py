"""JSON-file backed storage scope."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Mapping, Sequence

import anyio
import orjson

from profilesync.errors import PersistenceError
from profilesync.storage.base import KeyValueStore

logger = logging.getLogger(__name__)


class JsonFileStore(KeyValueStore):
    """
    Scope persisted as a single JSON object on disk.

    Every write rewrites the whole file through a temporary sibling that is
    then renamed over the target, so readers see either the old or the new
    contents. Writers on one instance are serialized from load to rename so
    an update to one key never writes back a stale copy of another.
    """

    def __init__(self, path: str | Path, name: str | None = None) -> None:
        self.path = anyio.Path(path)
        self.name = name or Path(path).stem
        self._write_lock = anyio.Lock()

    async def _load(self) -> Dict[str, Any]:
        try:
            if not await self.path.exists():
                return {}
            raw = await self.path.read_bytes()
        except OSError as exc:
            raise PersistenceError(f"Failed to read {self.name} scope: {exc}") from exc

        if not raw.strip():
            return {}
        try:
            data = orjson.loads(raw)
        except orjson.JSONDecodeError as exc:
            raise PersistenceError(
                f"Storage file for {self.name} scope is not valid JSON: {exc}"
            ) from exc
        if not isinstance(data, dict):
            raise PersistenceError(
                f"Storage file for {self.name} scope must hold a JSON object"
            )
        return data

    async def _dump(self, data: Dict[str, Any]) -> None:
        tmp_path = self.path.with_name(f"{self.path.name}.{uuid.uuid4().hex}.tmp")
        try:
            await self.path.parent.mkdir(parents=True, exist_ok=True)
            await tmp_path.write_bytes(orjson.dumps(data))
            await tmp_path.replace(self.path)
        except OSError as exc:
            logger.error(f"Write to {self.name} scope at {self.path} failed: {exc}")
            raise PersistenceError(f"Failed to write {self.name} scope: {exc}") from exc

    async def get(self, keys: Sequence[str]) -> Dict[str, Any]:
        data = await self._load()
        return {key: data[key] for key in keys if key in data}

    async def set(self, items: Mapping[str, Any]) -> None:
        async with self._write_lock:
            data = await self._load()
            data.update(items)
            await self._dump(data)

    async def remove(self, keys: Sequence[str]) -> None:
        async with self._write_lock:
            data = await self._load()
            if not any(key in data for key in keys):
                return
            for key in keys:
                data.pop(key, None)
            await self._dump(data)
