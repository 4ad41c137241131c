"""Merge command-line values into a loaded configuration."""

from typing import Any

from .CacheConfig import CacheConfig
from .CheckConfig import CheckConfig
from .DoclinksConfig import DoclinksConfig


def apply_overrides(
    config: DoclinksConfig,
    exclude: list[str] | None = None,
    cache_path: str | None = None,
    max_cache_age: str | None = None,
    concurrency: int | None = None,
    timeout: float | None = None,
    run_timeout: float | None = None,
    base: str | None = None,
    extensions: list[str] | None = None,
    no_cache: bool = False,
) -> DoclinksConfig:
    """Return a copy of ``config`` with every non-None override applied.

    Exclusion patterns are appended to the configured ones; other values
    replace them. The sections are rebuilt so their validators run.

    Raises:
        pydantic.ValidationError: If an override is invalid
    """
    check_updates: dict[str, Any] = {}
    if exclude:
        check_updates["exclude"] = [*config.check.exclude, *exclude]
    if concurrency is not None:
        check_updates["concurrency"] = concurrency
    if timeout is not None:
        check_updates["timeout_secs"] = timeout
    if run_timeout is not None:
        check_updates["run_timeout_secs"] = run_timeout
    if base is not None:
        check_updates["base"] = base
    if extensions:
        check_updates["extensions"] = extensions

    cache_updates: dict[str, Any] = {}
    if cache_path is not None:
        cache_updates["path"] = cache_path
    if max_cache_age is not None:
        cache_updates["max_age"] = max_cache_age
    if no_cache:
        cache_updates["enabled"] = False

    return config.model_copy(
        update={
            "check": CheckConfig(**{**config.check.model_dump(), **check_updates}),
            "cache": CacheConfig(**{**config.cache.model_dump(), **cache_updates}),
        }
    )
