"""Cache configuration."""

from datetime import timedelta
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .parse_duration import parse_duration


class CacheConfig(BaseModel):
    """Where link results are cached and how long they stay fresh."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(True, description="Read and write the cache file")
    path: Path = Field(Path(".doclinkscache"), description="Cache file location")
    max_age: timedelta = Field(timedelta(days=1), description="Maximum age of a reusable result")

    @field_validator("max_age", mode="before")
    @classmethod
    def _parse_max_age(cls, value):
        return parse_duration(value)

    @field_serializer("max_age")
    def _serialize_max_age(self, value: timedelta) -> float:
        return value.total_seconds()
