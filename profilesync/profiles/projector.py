"""Redacted, human-presentable views of a profile record."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping

from profilesync.profiles.models import DISPLAY_FIELDS, FieldName

MASK_PREFIX = "****"
CVV_MASK = "***"


def mask_value(field: str, value: str) -> str:
    """Mask card numbers down to their last four characters and hide CVVs."""
    if "num" in field and len(value) > 4:
        value = MASK_PREFIX + value[-4:]
    if "cvv" in field:
        value = CVV_MASK
    return value


def project(
    record: Mapping[str, str], fields: Iterable[str] = DISPLAY_FIELDS
) -> Dict[str, str]:
    """
    Build the display view of ``record``.

    Only allow-listed fields with a non-empty value are included, in
    allow-list order.
    """
    view: Dict[str, str] = {}
    for field in fields:
        value = record.get(field)
        if value:
            view[field] = mask_value(field, value)
    return view


def option_label(record: Mapping[str, str]) -> str:
    name = record.get(FieldName.PROFILE_NAME.value, "")
    email = record.get(FieldName.ACC_EMAIL.value) or "No email"
    return f"{name} - {email}"
