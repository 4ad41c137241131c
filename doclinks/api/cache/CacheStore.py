"""Persistent store of link validation results with age-based expiry."""

import json
import threading
from collections import Counter
from collections.abc import Callable
from contextlib import suppress
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import IO, Any

from pydantic import ValidationError

from doclinks.api.link.LinkStatus import LinkStatus
from doclinks.utils.logger import get_logger

from .CacheEntry import CacheEntry

logger = get_logger("cache")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CacheStore:
    """Cache of CacheEntry objects keyed by normalized link.

    The backing file holds one JSON record per line. ``load()`` opens it for
    appending so every ``write()`` reaches disk immediately and a crashed run
    keeps its partial progress; ``persist()`` rewrites the file atomically
    with one line per key and releases it. Lines repeated for a key are
    resolved last-write-wins on load.

    Lookups may run from many threads; writes are serialized by a lock.
    Failures to read or write the backing file are logged and never raised
    from ``lookup``/``write``/``load``: the cache only saves work. A
    ``read_only`` store never touches the file after loading.
    """

    def __init__(
        self,
        path: Path | None,
        max_age: timedelta,
        clock: Callable[[], datetime] = _utcnow,
        read_only: bool = False,
    ):
        self.path = Path(path) if path is not None else None
        self.max_age = max_age
        self.clock = clock
        self.read_only = read_only
        self.load_warnings: list[str] = []
        self.persist_error: str | None = None
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._journal: IO[str] | None = None

    def __enter__(self) -> "CacheStore":
        self.load()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        try:
            self.persist()
        except RuntimeError as e:
            self.persist_error = str(e)
            logger.warning("%s", e)
        return False

    def __len__(self) -> int:
        return len(self._entries)

    # ------------------------------------------------------------------
    # Scoped acquisition
    # ------------------------------------------------------------------

    def load(self) -> int:
        """Read the backing file and open it for appending.

        Returns:
            Number of entries loaded (0 on any failure)
        """
        self._entries = {}
        self.load_warnings = []
        if self.path is None:
            return 0

        if self.path.exists():
            try:
                lines = self.path.read_text(encoding="utf-8").splitlines()
            except (OSError, UnicodeDecodeError) as e:
                self._warn(f"Cannot read cache {self.path}: {e}; starting empty")
                lines = []

            for line_num, line in enumerate(lines, start=1):
                if not line.strip():
                    continue
                try:
                    entry = CacheEntry.model_validate_json(line)
                except ValidationError as e:
                    self._warn(f"Ignoring corrupt cache record {self.path}:{line_num}: {e.error_count()} errors")
                    continue
                self._entries[entry.key] = entry

        if self.read_only:
            return len(self._entries)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._journal = self.path.open("a", encoding="utf-8")
        except OSError as e:
            self._warn(f"Cannot open cache {self.path} for writing: {e}; results kept in memory")
            self._journal = None

        logger.info("Loaded %d cache entries from %s", len(self._entries), self.path)
        return len(self._entries)

    def persist(self) -> None:
        """Compact the backing file to one record per key and release it.

        Raises:
            RuntimeError: If the file cannot be written
        """
        with self._lock:
            self._close_journal()
            if self.path is None or self.read_only:
                return
            snapshot = sorted(self._entries.values(), key=lambda entry: entry.key)
            temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with temp_path.open("w", encoding="utf-8") as fh:
                    for entry in snapshot:
                        fh.write(entry.model_dump_json() + "\n")
                temp_path.replace(self.path)
            except OSError as e:
                with suppress(OSError):
                    if temp_path.exists():
                        temp_path.unlink()
                raise RuntimeError(f"Failed to persist cache {self.path}: {e}") from e
        logger.info("Persisted %d cache entries to %s", len(snapshot), self.path)

    # ------------------------------------------------------------------
    # Entry access
    # ------------------------------------------------------------------

    def is_fresh(self, entry: CacheEntry, now: datetime | None = None) -> bool:
        """Whether ``entry`` is still within its ttl (capped at ``max_age``)."""
        now = now or self.clock()
        return now <= entry.expires_at(self.max_age)

    def lookup(self, key: str) -> CacheEntry | None:
        """Return the fresh entry for ``key``, or None on miss or expiry."""
        entry = self._entries.get(key)
        if entry is None or not self.is_fresh(entry):
            return None
        return entry

    def write(self, entry: CacheEntry) -> None:
        """Insert or replace the entry for ``entry.key``."""
        with self._lock:
            self._entries[entry.key] = entry
            if self._journal is not None:
                try:
                    self._journal.write(entry.model_dump_json() + "\n")
                    self._journal.flush()
                except OSError as e:
                    logger.warning("Cache journal write failed, keeping results in memory: %s", e)
                    self._close_journal()

    def record(self, key: str, status: LinkStatus, reason: str = "") -> CacheEntry:
        """Write a result checked now with the store's max age as ttl."""
        entry = CacheEntry(key=key, status=status, checked_at=self.clock(), ttl=self.max_age, reason=reason)
        self.write(entry)
        return entry

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def prune(self) -> int:
        """Drop expired entries. Returns the number removed."""
        now = self.clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if not self.is_fresh(entry, now)]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def clear(self) -> int:
        """Drop every entry. Returns the number removed."""
        with self._lock:
            count = len(self._entries)
            self._entries = {}
        return count

    def stats(self) -> dict[str, Any]:
        """Counts of entries by freshness and status."""
        now = self.clock()
        entries = list(self._entries.values())
        fresh = sum(1 for entry in entries if self.is_fresh(entry, now))
        by_status = Counter(entry.status.value for entry in entries)
        return {
            "entries": len(entries),
            "fresh": fresh,
            "expired": len(entries) - fresh,
            "by_status": dict(sorted(by_status.items())),
        }

    def _close_journal(self) -> None:
        if self._journal is not None:
            with suppress(OSError):
                self._journal.close()
            self._journal = None

    def _warn(self, message: str) -> None:
        self.load_warnings.append(message)
        logger.warning(message)
