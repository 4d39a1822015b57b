"""Abstract base class for storage scopes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Sequence


class KeyValueStore(ABC):
    """
    One storage scope. Writes are independent; there is no cross-scope
    transaction and no locking, so concurrent writers resolve last-write-wins.
    """

    name: str

    @abstractmethod
    async def get(self, keys: Sequence[str]) -> Dict[str, Any]:
        """Return the stored values for ``keys``; missing keys are omitted."""

    @abstractmethod
    async def set(self, items: Mapping[str, Any]) -> None:
        """Store every item in ``items``, overwriting existing keys."""

    @abstractmethod
    async def remove(self, keys: Sequence[str]) -> None:
        """Delete ``keys``. Removing an absent key is not an error."""
