"""Core domain layer for simplecache."""

from simplecache.core.entities import CacheConfig, CacheEntry, ErrorMode
from simplecache.core.errors import (
    CacheError,
    CacheOperationError,
    InvalidKeyError,
    SerializationError,
)
from simplecache.core.interfaces import ICacheBackend, IRedisClient, ISerializer
from simplecache.core.services import Cache, ErrorPolicy, KeyValidator

__all__ = [
    # Entities
    "CacheConfig",
    "CacheEntry",
    "ErrorMode",
    # Errors
    "CacheError",
    "CacheOperationError",
    "InvalidKeyError",
    "SerializationError",
    # Interfaces
    "ICacheBackend",
    "IRedisClient",
    "ISerializer",
    # Services
    "Cache",
    "ErrorPolicy",
    "KeyValidator",
]
