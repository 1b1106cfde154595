"""Error handling — exception taxonomy for cache configuration and storage."""

from simple_db_cache.errors.exceptions import (
    ConfigurationError,
    ConstraintViolation,
    SimpleDbCacheError,
    StorageError,
)

__all__ = [
    "SimpleDbCacheError",
    "ConfigurationError",
    "StorageError",
    "ConstraintViolation",
]
