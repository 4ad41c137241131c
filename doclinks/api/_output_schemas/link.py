"""Output schemas for link commands."""

from typing import Any

from pydantic import Field

from ._base import BaseOutputSchema
from ._registry import register_output_schema


class LinkCheckOutput(BaseOutputSchema):
    """Output schema for link check command."""
    root: str = Field(..., description="Scanned root path")
    passed: bool = Field(..., description="True when no link is broken or errored")
    documents: int = Field(..., description="Number of documents scanned")
    summary: dict[str, int] = Field(..., description="Outcome counts by status, plus total and cached")
    failures: list[dict[str, Any]] = Field(..., description="Broken and errored references in report order")
    report_path: str | None = Field(..., description="Report file written, null if none")
    cache_path: str | None = Field(..., description="Cache file used, null if caching is disabled")


class LinkExtractOutput(BaseOutputSchema):
    """Output schema for link extract command."""
    root: str = Field(..., description="Scanned root path")
    count: int = Field(..., description="Number of references found")
    links: list[dict[str, Any]] = Field(..., description="References with document, line, column and target")


register_output_schema("link", "check", LinkCheckOutput)
register_output_schema("link", "extract", LinkExtractOutput)
