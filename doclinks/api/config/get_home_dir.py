"""Utility to discover the doclinks home directory."""

import os
from pathlib import Path

from doclinks.utils.normalize_path import normalize_path


def get_home_dir() -> Path:
    """Get home directory based on DOCLINKS_HOME or default to ~/.doclinks."""
    home_env = os.environ.get("DOCLINKS_HOME")
    if home_env:
        return normalize_path(home_env)
    return Path.home() / ".doclinks"
