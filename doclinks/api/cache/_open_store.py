from doclinks.api.config.apply_overrides import apply_overrides
from doclinks.api.config.DoclinksConfig import DoclinksConfig
from doclinks.utils.normalize_path import normalize_path

from .CacheStore import CacheStore


def _open_store(cache_path: str | None, max_cache_age: str | None, read_only: bool = False) -> CacheStore:
    """Build a CacheStore from configuration plus command-line overrides.

    Raises:
        ValueError: If the configuration or an override is invalid
    """
    loaded = DoclinksConfig.load()
    config = apply_overrides(loaded, cache_path=cache_path, max_cache_age=max_cache_age)
    return CacheStore(normalize_path(config.cache.path), config.cache.max_age, read_only=read_only)
