"""Configuration hierarchy — merges sources in priority order.

Precedence (later overrides earlier):
  1. Package defaults
  2. Global config   (~/.sdb-cache/config.yaml)
  3. Project config   (./sdb-cache.yaml, searched upward)
  4. Environment variables (SDB_CACHE_*)
  5. Runtime arguments
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from simple_db_cache.config.defaults import get_defaults

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".sdb-cache" / "config.yaml"
_PROJECT_CONFIG_NAME = "sdb-cache.yaml"

# Map of environment variables to config keys
_ENV_MAP: dict[str, str] = {
    "SDB_CACHE_DIR": "cache_dir",
    "SDB_CACHE_USE_MEMORY": "use_memory_cache",
    "SDB_CACHE_HYDRATE": "hydrate_memory_cache",
    "SDB_CACHE_EVICT_ON_READ": "evict_memory_on_read",
    "SDB_CACHE_REPLACE_ON_CONFLICT": "replace_on_conflict",
    "SDB_CACHE_LOG_LEVEL": "log_level",
}

# Keys that should be parsed as booleans
_BOOL_KEYS = {
    "use_memory_cache",
    "hydrate_memory_cache",
    "evict_memory_on_read",
    "replace_on_conflict",
}

# Boolean env var values
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Load and merge configuration from all sources.

    Returns a merged dict with the final resolved values.
    """
    config = get_defaults()

    # Global file first so the nearest project file wins
    for path in (_GLOBAL_CONFIG_PATH, _find_project_config()):
        if path is not None:
            config.update(_load_yaml_config(path) or {})

    config.update(_load_env_vars())

    # None means the caller did not set the option
    config.update({key: value for key, value in runtime_overrides.items() if value is not None})
    return config


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Read a YAML mapping from path; missing, unreadable or non-mapping files yield None."""
    if not path.is_file():
        return None
    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, ignoring", path)
        return None
    return data


def _find_project_config() -> Path | None:
    """Nearest sdb-cache.yaml in cwd or one of its parents."""
    cwd = Path.cwd()
    candidates = (directory / _PROJECT_CONFIG_NAME for directory in (cwd, *cwd.parents))
    return next((c for c in candidates if c.is_file()), None)


def _load_env_vars() -> dict[str, Any]:
    return {
        config_key: _coerce_env_value(config_key, os.environ[env_key])
        for env_key, config_key in _ENV_MAP.items()
        if env_key in os.environ
    }


def _coerce_env_value(key: str, value: str) -> Any:
    """Turn a boolean switch's env string into a bool; other keys stay strings."""
    if key not in _BOOL_KEYS:
        return value
    normalized = value.strip().lower()
    if normalized not in _TRUTHY | _FALSY:
        logger.warning("Unrecognised boolean %r for '%s', treating it as false", value, key)
    return normalized in _TRUTHY
