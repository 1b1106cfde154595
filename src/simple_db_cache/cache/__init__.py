"""Cache subsystem — two-tier (memory + SQLite) with mtime-based invalidation."""

from simple_db_cache.cache.disk import DiskCache
from simple_db_cache.cache.manager import CacheManager
from simple_db_cache.cache.memory import MemoryCache

__all__ = [
    "CacheManager",
    "DiskCache",
    "MemoryCache",
]
