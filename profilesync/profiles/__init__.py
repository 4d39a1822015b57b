"""Profile records, their repository, active selection and display."""

from profilesync.profiles.models import DISPLAY_FIELDS, FieldName, Record
from profilesync.profiles.projector import mask_value, option_label, project
from profilesync.profiles.repository import ProfileRepository
from profilesync.profiles.selector import ActiveProfileSelector, auto_detect

__all__ = [
    "ActiveProfileSelector",
    "DISPLAY_FIELDS",
    "FieldName",
    "ProfileRepository",
    "Record",
    "auto_detect",
    "mask_value",
    "option_label",
    "project",
]
