import re
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from profilesync.profiles.models import DISPLAY_FIELDS
from profilesync.profiles.selector import AUTO_DETECT_MARKER, AUTO_DETECT_PATTERN


class Settings(BaseSettings):
    """
    Centralized application settings leveraging environment overrides.
    """

    app_name: str = "Profile Sync"
    environment: str = Field("local", validation_alias="ENVIRONMENT")
    allow_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    # Storage scopes live side by side: <storage_dir>/sync.json and local.json
    storage_dir: Path = Path(".profilesync")
    max_csv_bytes: int = Field(5 * 1024 * 1024, ge=1024)  # 5 MB soft limit

    fetch_connect_timeout_s: float = Field(10.0, gt=0)
    fetch_read_timeout_s: float = Field(30.0, gt=0)

    auto_detect_marker: str = AUTO_DETECT_MARKER
    auto_detect_pattern: str = AUTO_DETECT_PATTERN

    display_fields: List[str] = Field(default_factory=lambda: list(DISPLAY_FIELDS))

    @field_validator("auto_detect_pattern")
    @classmethod
    def validate_auto_detect_pattern(cls, v: str) -> str:
        """Validate that the pattern compiles and captures the profile name."""
        try:
            compiled = re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern: {e}")
        if compiled.groups < 1:
            raise ValueError("auto_detect_pattern needs a capture group for the profile name")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
