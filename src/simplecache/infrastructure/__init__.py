"""Infrastructure layer implementations for simplecache."""

from simplecache.infrastructure.backends import (
    FileCacheBackend,
    InMemoryCacheBackend,
    RedisCacheBackend,
)
from simplecache.infrastructure.factory import create_backend
from simplecache.infrastructure.serializers import JsonSerializer, PickleSerializer

__all__ = [
    "FileCacheBackend",
    "InMemoryCacheBackend",
    "RedisCacheBackend",
    "JsonSerializer",
    "PickleSerializer",
    "create_backend",
]
