"""Path expansion utility for link extraction."""

import os
from collections.abc import Iterator
from pathlib import Path

from doclinks.utils.normalize_path import normalize_path


def expand_paths(
    path: Path,
    extensions: set[str] | None = None,
    exclude_dirnames: set[str] | None = None,
) -> Iterator[Path]:
    """Expand a path into individual files for processing.

    Directories are walked recursively in sorted order so that repeated
    scans of an unchanged tree yield the same sequence.

    Args:
        path: Path to file or directory
        extensions: Optional set of file extensions to include (e.g. {".md", ".txt"})
                   If None, all files are included
        exclude_dirnames: Directory names never descended into (e.g. {".git"})

    Yields:
        Individual file paths to process

    Raises:
        FileNotFoundError: If path does not exist
        PermissionError: If path cannot be read
    """
    path = normalize_path(path)
    skip = exclude_dirnames or set()

    if not path.exists():
        raise FileNotFoundError(f"Path does not exist: {path}")
    if not os.access(path, os.R_OK):
        raise PermissionError(f"Path is not readable: {path}")

    def _wanted(candidate: Path) -> bool:
        return extensions is None or candidate.suffix.lower() in extensions

    if path.is_file():
        if _wanted(path):
            yield path
        return

    for dirpath, dirnames, filenames in os.walk(path):
        dirnames[:] = sorted(d for d in dirnames if d not in skip)
        for name in sorted(filenames):
            child = Path(dirpath) / name
            if child.is_file() and _wanted(child):
                yield child
