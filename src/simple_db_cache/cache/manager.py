"""Cache manager — orchestrates L1 (memory) and L2 (disk) tiers.

Entries are validated against the source file's modification time: an entry
is served only if it was inserted strictly after the file was last modified.
Rewriting a file with identical content still invalidates its entry.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from types import TracebackType
from typing import Any

from pydantic import ValidationError

from simple_db_cache.cache.disk import DiskCache
from simple_db_cache.cache.memory import MemoryCache
from simple_db_cache.config.hierarchy import load_config_hierarchy
from simple_db_cache.config.schema import CacheOptions
from simple_db_cache.errors.exceptions import ConfigurationError
from simple_db_cache.types import CacheEntry, CacheStats, utc_now

logger = logging.getLogger(__name__)


def modified_at(path: str | Path) -> datetime:
    """Return the file's mtime as an aware UTC datetime. Raises OSError if missing."""
    return datetime.fromtimestamp(Path(path).stat().st_mtime, tz=timezone.utc)


class CacheManager:
    """Two-tier cache: L1 in-memory -> L2 on-disk (SQLite)."""

    def __init__(self, options: CacheOptions | None = None, **overrides: Any) -> None:
        options = options or CacheOptions()
        if overrides:
            try:
                options = CacheOptions(**{**options.model_dump(), **overrides})
            except ValidationError as e:
                raise ConfigurationError(f"Invalid cache options: {e}") from e
        options.validate_combination()

        self._options = options
        self._lock = threading.RLock()
        self._l1 = MemoryCache()
        self._l2 = DiskCache(
            cache_dir=options.cache_dir,
            replace_on_conflict=options.replace_on_conflict,
        )
        self._stats = CacheStats()

        if options.hydrate_memory_cache:
            try:
                self._hydrate()
            except BaseException:
                self._l2.close()
                raise

    @classmethod
    def from_config(cls, **runtime_overrides: Any) -> CacheManager:
        """Build a manager from defaults, config files, env vars and overrides."""
        config = load_config_hierarchy(**runtime_overrides)
        return cls(CacheOptions.from_config(config))

    @property
    def options(self) -> CacheOptions:
        return self._options

    @property
    def memory_cache(self) -> MemoryCache:
        return self._l1

    def get(self, path: str | Path) -> str | None:
        """Return cached content for path, or None if absent or stale.

        The stat happens first so a missing source file raises instead of
        being reported as a miss.
        """
        key = str(path)
        mtime = modified_at(key)

        with self._lock:
            if self._options.use_memory_cache:
                entry = self._l1.get(key)
                if entry is not None:
                    if self._options.evict_memory_on_read:
                        self._l1.delete(key)
                    if entry.is_fresh(mtime):
                        logger.debug("Getting %s from memory cache", key)
                        self._stats.memory_hits += 1
                        return entry.content

            entry = self._l2.get(key)
            if entry is not None and entry.is_fresh(mtime):
                logger.debug("Getting %s from database", key)
                # Promotion only pays off if the entry may be read again
                if self._options.use_memory_cache and not self._options.evict_memory_on_read:
                    self._l1.set(key, entry)
                self._stats.disk_hits += 1
                return entry.content

            logger.debug("%s not found", key)
            self._stats.misses += 1
            return None

    def add(self, path: str | Path, content: str) -> None:
        """Store content for path in L1 (if enabled) and L2."""
        key = str(path)
        logger.debug("Adding %s", key)
        entry = CacheEntry(content=content, inserted_at=utc_now())
        with self._lock:
            if self._options.use_memory_cache:
                self._l1.set(key, entry)
            self._l2.put(key, entry)

    def clear(self) -> None:
        """Clear both tiers. Every get misses until the next add."""
        logger.debug("Clearing memory cache and resetting database")
        with self._lock:
            self._l1.clear()
            self._l2.reset()
            self._stats = CacheStats()

    def stats(self) -> CacheStats:
        """Return aggregate cache statistics."""
        with self._lock:
            return CacheStats(
                memory_entries=len(self._l1),
                disk_entries=self._l2.entry_count,
                memory_size_mb=self._l1.size_mb,
                size_mb=self._l2.size_mb,
                memory_hits=self._stats.memory_hits,
                disk_hits=self._stats.disk_hits,
                misses=self._stats.misses,
            )

    def entries(self) -> list[tuple[str, CacheEntry]]:
        """Snapshot of every persisted (path, entry) pair."""
        with self._lock:
            return list(self._l2.scan_all())

    def close(self) -> None:
        with self._lock:
            self._l2.close()

    def __enter__(self) -> CacheManager:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _hydrate(self) -> None:
        logger.debug("Hydrating memory cache")
        count = 0
        for key, entry in self._l2.scan_all():
            self._l1.set(key, entry)
            count += 1
        logger.info("Hydrated memory cache with %d entries from %s", count, self._l2.db_path)
