"""Link check configuration."""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from doclinks import __version__

DEFAULT_EXTENSIONS = [".md", ".markdown", ".html", ".htm", ".rst", ".txt"]


class CheckConfig(BaseModel):
    """Settings for extraction and validation of links."""

    model_config = ConfigDict(extra="forbid")

    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS), description="Document suffixes")
    exclude: list[str] = Field(default_factory=list, description="Regular expressions for skipped targets")
    exclude_dirnames: list[str] = Field(
        default_factory=lambda: [".git", "node_modules"], description="Directory names never scanned"
    )
    base: str | None = Field(None, description="Directory that root-relative links (/path) resolve against")
    concurrency: int = Field(8, gt=0, description="Maximum number of checks in flight")
    timeout_secs: float = Field(20.0, gt=0, description="Timeout for a single request")
    run_timeout_secs: float | None = Field(None, gt=0, description="Timeout for the whole run")
    retries: int = Field(1, ge=0, description="Retries for timeouts and connection errors")
    backoff_secs: float = Field(1.0, ge=0, description="Delay before the first retry, doubled afterwards")
    user_agent: str = Field(f"doclinks/{__version__}", description="User-Agent header for remote checks")

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in value]

    @field_validator("exclude")
    @classmethod
    def _validate_patterns(cls, value: list[str]) -> list[str]:
        for pattern in value:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid exclude pattern {pattern!r}: {e}") from e
        return value
