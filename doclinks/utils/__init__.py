"""Shared helpers."""

from .expand_paths import expand_paths
from .logger import configure_logging, get_logger
from .normalize_path import normalize_path

__all__ = ["configure_logging", "expand_paths", "get_logger", "normalize_path"]
