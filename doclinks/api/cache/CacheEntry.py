"""Persisted validation result for one normalized link."""

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator

from doclinks.api.link.LinkStatus import LinkStatus


class CacheEntry(BaseModel):
    """Cached status of a NormalizedLink key.

    ``ttl`` is stored as seconds in the cache file.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    key: str
    status: LinkStatus
    checked_at: datetime
    ttl: timedelta
    reason: str = ""

    @field_validator("checked_at")
    @classmethod
    def _require_timezone(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            raise ValueError("checked_at must be timezone-aware")
        return value

    @field_serializer("ttl")
    def _serialize_ttl(self, value: timedelta) -> float:
        return value.total_seconds()

    def expires_at(self, max_age: timedelta | None = None) -> datetime:
        ttl = self.ttl if max_age is None else min(self.ttl, max_age)
        return self.checked_at + ttl
