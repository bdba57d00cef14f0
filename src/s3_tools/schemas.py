"""Request schemas for s3-tools commands."""

import re
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ObjectSelection(BaseModel):
    """Which objects of a bucket a command operates on."""

    bucket: str = Field(..., description="Bucket name")
    prefix: str = Field(default="", description="Key prefix, empty for the whole bucket")
    pattern: Optional[str] = Field(
        default=None, description="Regular expression tested against each key"
    )

    @field_validator("bucket", mode="before")
    @classmethod
    def _require_bucket(cls, value: Optional[str]) -> str:
        if value is None or not str(value).strip():
            raise ValueError("bucket name is required (use --bucket or S3_BUCKET)")
        return str(value).strip()

    @field_validator("prefix", mode="before")
    @classmethod
    def _default_prefix(cls, value: Optional[str]) -> str:
        return value or ""

    @field_validator("pattern")
    @classmethod
    def _compile_pattern(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"invalid filter pattern '{value}': {e}")
        return value

    def key_filter(self) -> Optional[re.Pattern[str]]:
        """Compiled filter, or None when every key is selected."""
        if self.pattern is None:
            return None
        return re.compile(self.pattern)


class UploadRequest(BaseModel):
    """A local file and where it should be stored."""

    bucket: str = Field(..., description="Bucket name")
    file_path: Path = Field(..., description="Local file to upload")
    key: Optional[str] = Field(
        default=None, description="Object key, defaults to the file name"
    )
    prefix: str = Field(default="", description="Key prefix for the destination")

    @field_validator("bucket", mode="before")
    @classmethod
    def _require_bucket(cls, value: Optional[str]) -> str:
        if value is None or not str(value).strip():
            raise ValueError("bucket name is required (use --bucket or S3_BUCKET)")
        return str(value).strip()

    @field_validator("prefix", mode="before")
    @classmethod
    def _default_prefix(cls, value: Optional[str]) -> str:
        return value or ""

    @field_validator("file_path")
    @classmethod
    def _require_file(cls, value: Path) -> Path:
        if not value.is_file():
            raise ValueError(f"file not found: {value}")
        return value

    @field_validator("key")
    @classmethod
    def _require_key(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip("/ "):
            raise ValueError("destination key must not be blank")
        return value

    @property
    def destination_key(self) -> str:
        """Object key the file is written to."""
        key = self.key if self.key is not None else self.file_path.name
        if not self.prefix:
            return key
        return f"{self.prefix.rstrip('/')}/{key.lstrip('/')}"
