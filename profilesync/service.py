"""Profile sync service wiring parsing, storage and selection together."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, Iterable, List, Optional

import httpx

from profilesync.config import Settings, get_settings
from profilesync.errors import CorruptStateError, NotFoundError, ParseError
from profilesync.ingest.parser import parse_csv
from profilesync.profiles.models import FieldName, Record
from profilesync.profiles.projector import project
from profilesync.profiles.repository import ProfileRepository
from profilesync.profiles.selector import ActiveProfileSelector
from profilesync.sources import decode_csv_bytes, fetch_csv_text
from profilesync.storage.base import KeyValueStore
from profilesync.storage.file import JsonFileStore

logger = logging.getLogger(__name__)


class ProfileSyncService:
    """Entry point used by the HTTP layer and other callers."""

    def __init__(
        self,
        sync_store: KeyValueStore,
        local_store: KeyValueStore,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.selector = ActiveProfileSelector(sync_store, local_store)
        self.repository = ProfileRepository(local_store, selector=self.selector)
        self._transport = transport

    async def import_csv_text(self, text: str) -> List[Record]:
        """
        Parse ``text`` and replace the stored collection with the result.

        Raises:
            ParseError: If the text is empty or yields no profiles
        """
        content = text.strip()
        if not content:
            raise ParseError("Please upload a CSV file or paste CSV content")

        records = parse_csv(content)
        if not records:
            raise ParseError("No valid profiles found in CSV")

        await self.repository.replace_all(records)
        logger.info(f"Imported {len(records)} profiles")
        return records

    async def import_csv_bytes(self, data: bytes) -> List[Record]:
        return await self.import_csv_text(decode_csv_bytes(data))

    async def import_csv_url(self, url: str) -> List[Record]:
        text = await fetch_csv_text(url, self.settings, transport=self._transport)
        return await self.import_csv_text(text)

    async def list_profiles(self) -> List[Record]:
        return await self.repository.list()

    async def get_profile(self, name: str) -> Record:
        record = await self.repository.find_by_name(name)
        if record is None:
            raise NotFoundError(f"Profile {name!r} not found")
        return record

    async def select_profile(self, name: str) -> Record:
        record = await self.get_profile(name)
        await self.selector.select(record)
        return record

    async def active_profile(self) -> Optional[Record]:
        """Return the active profile, treating an undecodable one as absent."""
        try:
            return await self.selector.current()
        except CorruptStateError as exc:
            logger.warning(f"Ignoring corrupt active profile: {exc}")
            return None

    async def active_display(self) -> Dict[str, str]:
        record = await self.active_profile()
        if record is None:
            return {}
        return self.display(record)

    def display(self, record: Record) -> Dict[str, str]:
        return project(record, self.settings.display_fields)

    async def update_credential(self, new_password: str) -> Record:
        new_password = new_password.strip()
        if not new_password:
            raise ParseError("Please enter a password")
        return await self.selector.update_field(FieldName.TM_PASS.value, new_password)

    async def detect_profile_name(
        self, candidate_urls: Iterable[Optional[str]]
    ) -> Optional[str]:
        return await self.selector.initialize_profile_name(
            candidate_urls,
            marker=self.settings.auto_detect_marker,
            pattern=self.settings.auto_detect_pattern,
        )

    async def clear_active(self) -> None:
        await self.selector.clear()

    async def clear_all(self) -> None:
        await self.repository.clear()


def build_file_service(settings: Settings) -> ProfileSyncService:
    storage_dir = settings.storage_dir
    return ProfileSyncService(
        sync_store=JsonFileStore(storage_dir / "sync.json", name="sync"),
        local_store=JsonFileStore(storage_dir / "local.json", name="local"),
        settings=settings,
    )


@lru_cache
def get_service() -> ProfileSyncService:
    return build_file_service(get_settings())
