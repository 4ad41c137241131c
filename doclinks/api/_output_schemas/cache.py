"""Output schemas for cache commands."""

from pydantic import Field

from ._base import BaseOutputSchema
from ._registry import register_output_schema


class CacheStatusOutput(BaseOutputSchema):
    """Output schema for cache status command."""
    cache_path: str = Field(..., description="Cache file location")
    exists: bool = Field(..., description="Whether the cache file exists")
    entries: int = Field(..., description="Total number of entries")
    fresh: int = Field(..., description="Entries still within their ttl")
    expired: int = Field(..., description="Entries past their ttl")
    by_status: dict[str, int] = Field(..., description="Entry counts by status")


class CachePruneOutput(BaseOutputSchema):
    """Output schema for cache prune command."""
    cache_path: str = Field(..., description="Cache file location")
    deleted_count: int = Field(..., description="Number of expired entries removed")
    remaining: int = Field(..., description="Entries left after pruning")


class CacheClearOutput(BaseOutputSchema):
    """Output schema for cache clear command."""
    cache_path: str = Field(..., description="Cache file location")
    deleted_count: int = Field(..., description="Number of entries removed")


register_output_schema("cache", "status", CacheStatusOutput)
register_output_schema("cache", "prune", CachePruneOutput)
register_output_schema("cache", "clear", CacheClearOutput)
