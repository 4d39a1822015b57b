"""Serialization of records at the storage boundary."""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence

import orjson
from pydantic import TypeAdapter, ValidationError

from profilesync.errors import CorruptStateError


_RECORD_ADAPTER = TypeAdapter(Dict[str, str])
_COLLECTION_ADAPTER = TypeAdapter(List[Dict[str, str]])


def serialize(record: Mapping[str, str]) -> str:
    return orjson.dumps(dict(record)).decode()


def deserialize(blob: str) -> Dict[str, str]:
    """
    Decode a serialized record.

    Raises:
        CorruptStateError: If the blob is not a JSON object of string values
    """
    if not isinstance(blob, (str, bytes)):
        raise CorruptStateError("Stored profile is not a serialized string")
    try:
        return _RECORD_ADAPTER.validate_json(blob, strict=True)
    except ValidationError as exc:
        raise CorruptStateError(f"Stored profile could not be decoded: {exc}") from exc


def serialize_collection(records: Sequence[Mapping[str, str]]) -> str:
    return orjson.dumps([dict(record) for record in records]).decode()


def deserialize_collection(blob: str) -> List[Dict[str, str]]:
    if not isinstance(blob, (str, bytes)):
        raise CorruptStateError("Stored profile list is not a serialized string")
    try:
        return _COLLECTION_ADAPTER.validate_json(blob, strict=True)
    except ValidationError as exc:
        raise CorruptStateError(f"Stored profile list could not be decoded: {exc}") from exc
