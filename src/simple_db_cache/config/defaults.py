"""Package-level default configuration values."""

from __future__ import annotations

import tempfile
from typing import Any

# Persistent store location
DEFAULT_CACHE_DIR = tempfile.gettempdir()
DB_FILENAME = "simple-db-cache.sqlite"

# Memory store behaviour
DEFAULT_USE_MEMORY_CACHE = True
DEFAULT_HYDRATE_MEMORY_CACHE = False
DEFAULT_EVICT_MEMORY_ON_READ = False

# Repeat adds replace the stored row instead of failing
DEFAULT_REPLACE_ON_CONFLICT = True

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "cache_dir": DEFAULT_CACHE_DIR,
        "use_memory_cache": DEFAULT_USE_MEMORY_CACHE,
        "hydrate_memory_cache": DEFAULT_HYDRATE_MEMORY_CACHE,
        "evict_memory_on_read": DEFAULT_EVICT_MEMORY_ON_READ,
        "replace_on_conflict": DEFAULT_REPLACE_ON_CONFLICT,
        "log_level": DEFAULT_LOG_LEVEL,
    }
