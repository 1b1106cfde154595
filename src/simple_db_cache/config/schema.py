"""Pydantic model for cache options."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from simple_db_cache.config.defaults import (
    DEFAULT_CACHE_DIR,
    DEFAULT_EVICT_MEMORY_ON_READ,
    DEFAULT_HYDRATE_MEMORY_CACHE,
    DEFAULT_REPLACE_ON_CONFLICT,
    DEFAULT_USE_MEMORY_CACHE,
)
from simple_db_cache.errors.exceptions import ConfigurationError


class CacheOptions(BaseModel):
    """Start-up switches for a CacheManager.

    ``hydrate_memory_cache`` pre-loads every persisted row into memory and
    therefore needs ``use_memory_cache``. ``evict_memory_on_read`` turns the
    memory store into a single-use staging buffer: a hit removes the entry
    and disk hits are never promoted.
    """

    model_config = ConfigDict(extra="forbid")

    cache_dir: Path = Field(default_factory=lambda: Path(DEFAULT_CACHE_DIR))
    use_memory_cache: bool = DEFAULT_USE_MEMORY_CACHE
    hydrate_memory_cache: bool = DEFAULT_HYDRATE_MEMORY_CACHE
    evict_memory_on_read: bool = DEFAULT_EVICT_MEMORY_ON_READ
    replace_on_conflict: bool = DEFAULT_REPLACE_ON_CONFLICT

    def validate_combination(self) -> None:
        """Reject option combinations that cannot work together."""
        if self.hydrate_memory_cache and not self.use_memory_cache:
            raise ConfigurationError(
                "can only hydrate the memory cache if the memory cache is used",
                option="hydrate_memory_cache",
            )

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> CacheOptions:
        """Pick the cache options out of a merged config dict, ignoring other keys."""
        fields = {key: config[key] for key in cls.model_fields if config.get(key) is not None}
        try:
            return cls(**fields)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid cache options in config: {e}") from e
