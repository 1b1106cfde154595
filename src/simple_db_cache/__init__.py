"""simple-db-cache — two-tier file-artifact cache invalidated by modification time."""

from simple_db_cache.cache.manager import CacheManager
from simple_db_cache.config.schema import CacheOptions
from simple_db_cache.errors.exceptions import (
    ConfigurationError,
    ConstraintViolation,
    SimpleDbCacheError,
    StorageError,
)
from simple_db_cache.types import CacheEntry, CacheStats

__all__ = [
    "CacheManager",
    "CacheOptions",
    "CacheEntry",
    "CacheStats",
    "SimpleDbCacheError",
    "ConfigurationError",
    "StorageError",
    "ConstraintViolation",
]
