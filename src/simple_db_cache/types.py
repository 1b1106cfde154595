"""Shared Pydantic models for simple-db-cache."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CacheEntry(BaseModel):
    """A cached artifact together with the time it was written."""

    content: str
    inserted_at: datetime = Field(default_factory=utc_now)

    @field_validator("inserted_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Naive timestamps are treated as UTC so comparisons never mix kinds
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def is_fresh(self, modified_at: datetime) -> bool:
        """Valid only when written strictly after the source's last modification."""
        return self.inserted_at > modified_at

    @property
    def size_bytes(self) -> int:
        return len(self.content.encode("utf-8"))


class CacheStats(BaseModel):
    """Aggregate cache statistics."""

    memory_entries: int = 0
    disk_entries: int = 0
    memory_size_mb: float = 0.0
    size_mb: float = 0.0
    memory_hits: int = 0
    disk_hits: int = 0
    misses: int = 0

    @property
    def hits(self) -> int:
        return self.memory_hits + self.disk_hits

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0
