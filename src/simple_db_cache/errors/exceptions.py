"""Custom exception hierarchy for simple-db-cache."""

from __future__ import annotations

from pathlib import Path


class SimpleDbCacheError(Exception):
    """Base exception for all simple-db-cache errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(SimpleDbCacheError):
    """Invalid option combination, raised before anything touches disk.

    Example: hydrating the memory cache while the memory cache is disabled.
    """

    def __init__(self, message: str = "", option: str | None = None) -> None:
        super().__init__(message)
        self.option = option


class StorageError(SimpleDbCacheError):
    """The persistent store could not be opened, read or written.

    Examples: disk full, corrupt database file, permission denied.
    """

    def __init__(
        self,
        message: str = "",
        db_path: Path | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.db_path = db_path
        self.original = original


class ConstraintViolation(StorageError):
    """A write was rejected by a uniqueness constraint of the persistent store."""

    def __init__(
        self,
        message: str = "",
        key: str = "",
        db_path: Path | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message, db_path=db_path, original=original)
        self.key = key
