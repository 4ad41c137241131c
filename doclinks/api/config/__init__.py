"""Configuration models."""

from .CacheConfig import CacheConfig
from .CheckConfig import CheckConfig
from .DoclinksConfig import DoclinksConfig
from .get_home_dir import get_home_dir
from .LogConfig import LogConfig
from .parse_duration import parse_duration

__all__ = [
    "CacheConfig",
    "CheckConfig",
    "DoclinksConfig",
    "LogConfig",
    "get_home_dir",
    "parse_duration",
]
