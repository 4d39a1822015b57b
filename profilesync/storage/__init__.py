"""Key-value storage scopes and the record codec used at their boundary."""

from profilesync.storage.base import KeyValueStore
from profilesync.storage.file import JsonFileStore
from profilesync.storage.memory import InMemoryStore

__all__ = ["InMemoryStore", "JsonFileStore", "KeyValueStore"]
