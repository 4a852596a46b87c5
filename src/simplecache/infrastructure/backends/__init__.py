"""Cache storage backends."""

from simplecache.infrastructure.backends.file import FileCacheBackend
from simplecache.infrastructure.backends.memory import InMemoryCacheBackend
from simplecache.infrastructure.backends.redis import RedisCacheBackend

__all__ = [
    "FileCacheBackend",
    "InMemoryCacheBackend",
    "RedisCacheBackend",
]
