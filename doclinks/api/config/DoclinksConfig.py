"""Top-level doclinks configuration."""

import json
from contextlib import suppress
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .CacheConfig import CacheConfig
from .CheckConfig import CheckConfig
from .get_home_dir import get_home_dir
from .LogConfig import LogConfig


class DoclinksConfig(BaseModel):
    """Top-level configuration for doclinks."""

    model_config = ConfigDict(extra="forbid")

    check: CheckConfig = Field(default_factory=CheckConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    log: LogConfig = Field(default_factory=LogConfig)

    @classmethod
    def get_config_path(cls) -> Path:
        """Get path to config file based on DOCLINKS_HOME or default to ~/.doclinks."""
        return get_home_dir() / "config.json"

    @classmethod
    def load(cls, path: Path | None = None) -> "DoclinksConfig":
        """Load and validate config from file.

        A missing file is not an error: every section has defaults, so a
        fresh checkout can run without any configuration.

        Raises:
            ValueError: If the file holds invalid JSON or fails validation
        """
        path = path or cls.get_config_path()

        if not path.exists():
            return cls()

        try:
            with path.open() as fh:
                raw = json.load(fh)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {path}: {e}") from e

        try:
            return cls(**raw)
        except ValidationError as e:
            error_list = e.errors() or [{"msg": str(e), "loc": (), "type": "value_error", "input": None}]
            first = error_list[0]
            error_msg = first.get("msg", str(e))
            loc = first.get("loc", ())
            field = ".".join(str(x) for x in loc) if isinstance(loc, (list, tuple)) else ""
            detail = f"{field}: {error_msg}" if field else error_msg
            raise ValueError(f"Configuration validation error: {detail}") from e

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return self.model_dump(mode="json")

    def save(self, path: Path | None = None) -> None:
        """Save the configuration atomically (temp file, then rename)."""
        path = path or self.get_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with temp_path.open("w") as fh:
                json.dump(self.to_dict(), fh, indent=4)
            temp_path.replace(path)
        except Exception as e:
            with suppress(Exception):
                if temp_path.exists():
                    temp_path.unlink()
            raise RuntimeError(f"Failed to save config: {e}") from e
