"""simplecache - Key-value caching over interchangeable storage backends.

A small library exposing one operation set (get, set, delete,
clear, has and their batched variants) over a durable file
backend, a Redis backend and an in-memory backend. Every backend
honors TTL expiry and a per-instance error mode.

Example with the file backend:
    from simplecache import Cache, ErrorMode, FileCacheBackend

    cache = Cache(FileCacheBackend("/var/cache/myapp"))

    cache.set("user.42", {"name": "Alice"}, ttl=300)
    cache.get("user.42")  # {"name": "Alice"}

    cache.set_multiple({"a": 1, "b": 2})
    cache.get_multiple(["a", "b", "c"], default=0)  # {"a": 1, "b": 2, "c": 0}

Example with Redis, degrading to cache misses when Redis is down:
    import redis
    from simplecache import Cache, ErrorMode, RedisCacheBackend

    client = redis.Redis(host="localhost", port=6379)
    cache = Cache(RedisCacheBackend(client, mode=ErrorMode.FAIL))

From configuration:
    from simplecache import Cache, CacheConfig

    cache = Cache.from_config(CacheConfig(backend="memory"))
"""

from simplecache.core.entities import CacheConfig, CacheEntry, ErrorMode
from simplecache.core.errors import (
    CacheError,
    CacheOperationError,
    InvalidKeyError,
    SerializationError,
)
from simplecache.core.interfaces import ICacheBackend, IRedisClient, ISerializer
from simplecache.core.services import (
    NAMESPACED_KEY_VALIDATOR,
    STRICT_KEY_VALIDATOR,
    Cache,
    ErrorPolicy,
    KeyValidator,
)
from simplecache.infrastructure import (
    FileCacheBackend,
    InMemoryCacheBackend,
    JsonSerializer,
    PickleSerializer,
    RedisCacheBackend,
    create_backend,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "CacheConfig",
    "CacheEntry",
    "ErrorMode",
    # Errors
    "CacheError",
    "CacheOperationError",
    "InvalidKeyError",
    "SerializationError",
    # Core interfaces
    "ICacheBackend",
    "IRedisClient",
    "ISerializer",
    # Core services
    "Cache",
    "ErrorPolicy",
    "KeyValidator",
    "STRICT_KEY_VALIDATOR",
    "NAMESPACED_KEY_VALIDATOR",
    # Infrastructure implementations
    "FileCacheBackend",
    "InMemoryCacheBackend",
    "RedisCacheBackend",
    "JsonSerializer",
    "PickleSerializer",
    "create_backend",
]
