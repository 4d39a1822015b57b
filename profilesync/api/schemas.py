# profilesync/api/schemas.py
from typing import Dict, List, Optional
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
    model_validator,
)

from profilesync.profiles.models import FieldName
from profilesync.profiles.projector import option_label


class ImportRequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    # pasted content accepted as "csv_text" or "text"
    csv_text: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("csv_text", "text"),
        description="Inline CSV content with a header row.",
    )
    csv_url: Optional[HttpUrl] = Field(
        default=None,
        validation_alias=AliasChoices("csv_url", "url"),
        description="Remote spreadsheet export returning CSV.",
    )

    @model_validator(mode="after")
    def ensure_source(self) -> "ImportRequestModel":
        if self.csv_text is None and self.csv_url is None:
            raise ValueError("Either `csv_text` or `csv_url` must be provided.")
        return self


class ProfileListItemModel(BaseModel):
    profile_name: str
    uuid: str
    label: str
    acc_email: Optional[str] = None
    name: str = ""
    tel: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, str]) -> "ProfileListItemModel":
        fname = record.get(FieldName.FNAME.value, "")
        lname = record.get(FieldName.LNAME.value, "")
        return cls(
            profile_name=record.get(FieldName.PROFILE_NAME.value, ""),
            uuid=record.get(FieldName.UUID.value, ""),
            label=option_label(record),
            acc_email=record.get(FieldName.ACC_EMAIL.value) or None,
            name=f"{fname} {lname}".strip(),
            tel=record.get(FieldName.TEL.value) or None,
        )


class ImportResponseModel(BaseModel):
    imported: int
    profiles: List[ProfileListItemModel]


class ProfileDisplayModel(BaseModel):
    profile_name: str
    display: Dict[str, str]


class SelectRequestModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    profile_name: str = Field(..., min_length=1)

    @field_validator("profile_name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return value.strip()


class ActiveProfileModel(BaseModel):
    profile_name: Optional[str] = None
    profile: Optional[Dict[str, str]] = None
    display: Dict[str, str] = Field(default_factory=dict)


class ProfileNameModel(BaseModel):
    profile_name: Optional[str] = None


class AutoDetectRequestModel(BaseModel):
    urls: List[Optional[str]] = Field(default_factory=list)

    @field_validator("urls", mode="before")
    @classmethod
    def normalize_urls(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


class AutoDetectResponseModel(BaseModel):
    profile_name: Optional[str] = None
    detected: bool


class CredentialUpdateModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    new_password: str = Field(
        ..., validation_alias=AliasChoices("new_password", "newPassword")
    )
