"""Domain entities for simplecache."""

from simplecache.core.entities.cache_config import CacheConfig
from simplecache.core.entities.cache_entry import CacheEntry
from simplecache.core.entities.error_mode import ErrorMode

__all__ = [
    "CacheEntry",
    "CacheConfig",
    "ErrorMode",
]
