"""Stored collection of parsed profile records."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

from profilesync.profiles.models import FieldName, Record
from profilesync.storage.base import KeyValueStore
from profilesync.storage.codec import deserialize_collection, serialize_collection

if TYPE_CHECKING:
    from profilesync.profiles.selector import ActiveProfileSelector

logger = logging.getLogger(__name__)

PROFILES_KEY = "csvProfiles"


class ProfileRepository:
    """
    Collection of records kept as one blob in the local scope.

    ``replace_all`` is the only mutator; the blob is written with a single
    store call so readers never see a partially replaced collection.
    """

    def __init__(
        self,
        local_store: KeyValueStore,
        selector: Optional["ActiveProfileSelector"] = None,
    ) -> None:
        self._store = local_store
        self._selector = selector

    async def replace_all(self, records: Sequence[Record]) -> None:
        blob = serialize_collection(records)
        await self._store.set({PROFILES_KEY: blob})
        logger.info(f"Stored {len(records)} profiles in {self._store.name} scope")

    async def list(self) -> List[Record]:
        """
        Return the stored collection in source-row order.

        Raises:
            CorruptStateError: If the stored blob cannot be decoded
        """
        data = await self._store.get([PROFILES_KEY])
        blob = data.get(PROFILES_KEY)
        if blob is None:
            return []
        return deserialize_collection(blob)

    async def find_by_name(self, name: str) -> Optional[Record]:
        """Return the first record whose ``profile_name`` equals ``name``."""
        key = FieldName.PROFILE_NAME.value
        for record in await self.list():
            if record.get(key) == name:
                return record
        return None

    async def clear(self) -> None:
        """Drop the collection and, when wired to a selector, the active profile."""
        await self._store.remove([PROFILES_KEY])
        if self._selector is not None:
            await self._selector.clear()
        logger.info("Cleared stored profiles")
