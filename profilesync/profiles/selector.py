"""Active profile selection mirrored across the synced and local scopes."""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional, Sequence

from profilesync.errors import NotFoundError, ParseError, PersistenceError
from profilesync.profiles.models import FieldName, Record
from profilesync.storage.base import KeyValueStore
from profilesync.storage.codec import deserialize, serialize

logger = logging.getLogger(__name__)

PROFILE_INFO_KEY = "profileInfo"
PROFILE_NAME_KEY = "profile_name"

AUTO_DETECT_MARKER = "whoerip.com/multilogin/"
AUTO_DETECT_PATTERN = r"multilogin/([A-Za-z0-9]+)"


def auto_detect(
    candidate_urls: Iterable[Optional[str]],
    marker: str = AUTO_DETECT_MARKER,
    pattern: str = AUTO_DETECT_PATTERN,
) -> Optional[str]:
    """
    Return the first profile identifier found in ``candidate_urls``.

    A URL is considered only when it contains ``marker``; the identifier is
    the first capture group of ``pattern`` (the whole match when it has no
    group). Returns None when nothing matches.
    """
    regex = re.compile(pattern)
    for url in candidate_urls:
        if not url or marker not in url:
            continue
        match = regex.search(url)
        if match:
            return match.group(1 if regex.groups else 0)
    return None


class ActiveProfileSelector:
    """
    Designates one record as the current profile.

    The selection is written to the synced scope first and then to the local
    scope. There is no rollback: if the second write fails the scopes stay
    out of step and the caller sees a PersistenceError.
    """

    def __init__(self, sync_store: KeyValueStore, local_store: KeyValueStore) -> None:
        self._sync = sync_store
        self._local = local_store

    @property
    def scopes(self) -> tuple[KeyValueStore, KeyValueStore]:
        return (self._sync, self._local)

    async def _write(
        self, store: KeyValueStore, items: Dict[str, str], stale: Sequence[str] = ()
    ) -> None:
        try:
            await store.set(items)
            if stale:
                await store.remove(stale)
        except PersistenceError as exc:
            logger.error(f"Active profile write to {store.name} scope failed: {exc}")
            raise PersistenceError(
                f"Active profile was not saved to the {store.name} scope"
            ) from exc

    async def select(self, record: Record) -> None:
        name = record.get(FieldName.PROFILE_NAME.value)
        items = {PROFILE_INFO_KEY: serialize(record)}
        stale: List[str] = []
        # nameless record: drop any profile_name left by an earlier selection
        if name is None:
            stale.append(PROFILE_NAME_KEY)
        else:
            items[PROFILE_NAME_KEY] = name
        for store in self.scopes:
            await self._write(store, items, stale)
        logger.info(f"Active profile set to {name!r}")

    async def current(self) -> Optional[Record]:
        """
        Read the active profile from the synced scope.

        Raises:
            CorruptStateError: If the stored profile cannot be decoded
        """
        data = await self._sync.get([PROFILE_INFO_KEY])
        blob = data.get(PROFILE_INFO_KEY)
        if not blob:
            return None
        return deserialize(blob)

    async def clear(self) -> None:
        for store in self.scopes:
            await store.remove([PROFILE_INFO_KEY, PROFILE_NAME_KEY])
        logger.info("Active profile cleared")

    async def update_field(self, field: str, value: str) -> Record:
        """Set one field on the active profile and write it back to both scopes."""
        record = await self.current()
        if record is None:
            raise NotFoundError("No active profile to update")
        record = dict(record)
        record[field] = value
        await self.select(record)
        return record

    async def current_name(self) -> Optional[str]:
        data = await self._sync.get([PROFILE_NAME_KEY])
        return data.get(PROFILE_NAME_KEY) or None

    async def set_profile_name(self, name: str) -> str:
        name = name.strip()
        if not name:
            raise ParseError("Please enter a profile ID")
        await self._sync.set({PROFILE_NAME_KEY: name})
        return name

    async def clear_profile_name(self) -> None:
        await self._sync.remove([PROFILE_NAME_KEY])

    async def initialize_profile_name(
        self,
        candidate_urls: Iterable[Optional[str]],
        marker: str = AUTO_DETECT_MARKER,
        pattern: str = AUTO_DETECT_PATTERN,
    ) -> Optional[str]:
        """Keep the stored profile name, or auto-detect and store one."""
        existing = await self.current_name()
        if existing:
            return existing

        detected = auto_detect(candidate_urls, marker=marker, pattern=pattern)
        if detected is None:
            logger.warning("No profile name could be auto-detected")
            return None
        await self._sync.set({PROFILE_NAME_KEY: detected})
        logger.info(f"Auto-detected profile name {detected!r}")
        return detected
