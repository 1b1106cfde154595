"""Configuration — defaults, option model and layered loading."""

from simple_db_cache.config.hierarchy import load_config_hierarchy
from simple_db_cache.config.schema import CacheOptions

__all__ = ["CacheOptions", "load_config_hierarchy"]
