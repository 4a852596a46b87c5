"""Cache facade - the main entry point for caching operations."""

from collections.abc import Iterable, Mapping
from datetime import timedelta
from typing import Any

from simplecache.core.entities.cache_config import CacheConfig
from simplecache.core.entities.error_mode import ErrorMode
from simplecache.core.interfaces.cache_backend import ICacheBackend
from simplecache.core.interfaces.redis_client import IRedisClient


class Cache:
    """Backend-agnostic cache.

    Forwards every call verbatim to the backend it was constructed
    with; all behavior (validation, expiry, error mode) belongs to
    the backend.
    """

    def __init__(self, backend: ICacheBackend) -> None:
        """Initialize the cache.

        Args:
            backend: The cache backend to use for storage.
        """
        self._backend = backend

    @classmethod
    def from_config(
        cls,
        config: CacheConfig | None = None,
        redis_client: IRedisClient | None = None,
    ) -> "Cache":
        """Create a cache around the backend described by a configuration.

        Args:
            config: Cache configuration. Uses defaults if not provided.
            redis_client: Optional client for the Redis backend.

        Returns:
            A new Cache instance.
        """
        from simplecache.infrastructure.factory import create_backend

        return cls(create_backend(config, redis_client=redis_client))

    @property
    def backend(self) -> ICacheBackend:
        """Get the wrapped backend."""
        return self._backend

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve a value, or default on a miss."""
        return self._backend.get(key, default)

    def set(self, key: str, value: Any, ttl: int | timedelta | None = None) -> bool:
        """Store a value with an optional TTL."""
        return self._backend.set(key, value, ttl)

    def delete(self, key: str) -> bool:
        """Delete a key."""
        return self._backend.delete(key)

    def clear(self) -> bool:
        """Remove every value owned by the backend."""
        return self._backend.clear()

    def has(self, key: str) -> bool:
        """Check whether a live value exists for key."""
        return self._backend.has(key)

    def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]:
        """Retrieve several values, mapping misses to default."""
        return self._backend.get_multiple(keys, default)

    def set_multiple(
        self,
        values: Mapping[str, Any] | Iterable[tuple[str, Any]],
        ttl: int | timedelta | None = None,
    ) -> bool:
        """Store several values with the same TTL."""
        return self._backend.set_multiple(values, ttl)

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        """Delete several keys."""
        return self._backend.delete_multiple(keys)

    def set_mode(self, mode: ErrorMode | str) -> None:
        """Change the backend error mode."""
        self._backend.set_mode(mode)
