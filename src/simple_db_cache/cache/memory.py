"""L1 in-memory cache."""

from __future__ import annotations

from simple_db_cache.types import CacheEntry


class MemoryCache:
    """Volatile path -> entry mapping. Freshness checks live in the manager."""

    def __init__(self) -> None:
        self._store: dict[str, CacheEntry] = {}

    def get(self, path: str) -> CacheEntry | None:
        return self._store.get(path)

    def set(self, path: str, entry: CacheEntry) -> None:
        self._store[path] = entry

    def delete(self, path: str) -> None:
        self._store.pop(path, None)

    def clear(self) -> None:
        self._store.clear()

    def contains(self, path: str) -> bool:
        return path in self._store

    @property
    def size_mb(self) -> float:
        return sum(e.size_bytes for e in self._store.values()) / (1024 * 1024)

    def __contains__(self, path: object) -> bool:
        return path in self._store

    def __len__(self) -> int:
        return len(self._store)
