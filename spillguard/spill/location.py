from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SpillLocation(BaseModel):
    """Where a query spills a block: bucket plus object key."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    bucket: str
    key: str = Field(default="")

    @field_validator("bucket")
    @classmethod
    def _bucket_non_empty(cls, v: Any) -> str:
        if not v:
            raise ValueError("bucket must be a non-empty string")
        return v

    @property
    def uri(self) -> str:
        return f"s3://{self.bucket}/{self.key}"
