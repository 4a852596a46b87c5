"""Core interfaces (Protocol classes) for simplecache."""

from simplecache.core.interfaces.cache_backend import ICacheBackend
from simplecache.core.interfaces.redis_client import IRedisClient
from simplecache.core.interfaces.serializer import ISerializer

__all__ = [
    "ICacheBackend",
    "IRedisClient",
    "ISerializer",
]
