"""In-memory cache backend implementation."""

import math
import sys
import threading
import time
from collections.abc import Callable, Iterable, Mapping
from datetime import timedelta
from typing import Any

from cachetools import TLRUCache  # type: ignore[import-untyped]

from simplecache.core.entities.error_mode import ErrorMode
from simplecache.core.errors import CacheOperationError, SerializationError
from simplecache.core.interfaces.serializer import ISerializer
from simplecache.core.services.error_policy import ErrorPolicy
from simplecache.core.services.key_validator import NAMESPACED_KEY_VALIDATOR
from simplecache.core.services.ttl_resolver import is_expired, resolve_expires_at
from simplecache.infrastructure.serializers.pickle import PickleSerializer


def _time_to_use(key: str, item: tuple[bytes, float | None], now: float) -> float:
    """Return the absolute expiry of a stored item for TLRUCache."""
    expires_at = item[1]
    return math.inf if expires_at is None else expires_at


class InMemoryCacheBackend:
    """In-memory cache backend with per-item TTL.

    Suitable for single-process deployments and tests. Uses a
    cachetools TLRUCache keyed on each item's own expiry instant.
    Values are stored serialized, so callers never share mutable
    state with the cache.
    """

    def __init__(
        self,
        maxsize: int = sys.maxsize,
        mode: ErrorMode | str = ErrorMode.THROW,
        serializer: ISerializer | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the in-memory cache backend.

        Args:
            maxsize: Maximum number of items (effectively unbounded by default).
            mode: Error handling mode for serialization faults.
            serializer: Value serializer. Defaults to PickleSerializer.
            clock: Wall-clock source returning epoch seconds.
        """
        self._maxsize = maxsize
        self._policy = ErrorPolicy(mode)
        self._serializer = serializer or PickleSerializer()
        self._clock = clock
        self._validator = NAMESPACED_KEY_VALIDATOR
        self._cache: TLRUCache[str, tuple[bytes, float | None]] = TLRUCache(
            maxsize=maxsize,
            ttu=_time_to_use,
            timer=clock,
        )
        # cachetools caches are not thread-safe
        self._lock = threading.Lock()

    @property
    def mode(self) -> ErrorMode:
        """Return the current error mode."""
        return self._policy.mode

    def set_mode(self, mode: ErrorMode | str) -> None:
        """Set error handling mode at runtime."""
        self._policy.mode = mode

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.
            default: Value returned on a miss.

        Returns:
            The cached value, or default if not found or expired.
        """
        self._validator.validate(key)

        with self._lock:
            item = self._cache.get(key)

        if item is None:
            return default

        try:
            return self._serializer.deserialize(item[0])
        except SerializationError as e:
            return self._policy.handle(
                CacheOperationError(f"Failed to decode cached value for key '{key}'"),
                default,
                cause=e,
            )

    def set(
        self,
        key: str,
        value: Any,
        ttl: int | timedelta | None = None,
    ) -> bool:
        """Store value with optional TTL.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: Optional time-to-live. Zero or less deletes the key.

        Returns:
            True on success, False if the value cannot be serialized
            in FAIL mode.
        """
        self._validator.validate(key)

        now = self._clock()
        expires_at = resolve_expires_at(ttl, now)

        if is_expired(expires_at, now):
            return self.delete(key)

        try:
            payload = self._serializer.serialize(value)
        except SerializationError as e:
            return self._policy.handle(
                CacheOperationError(f"Failed to encode value for key '{key}'"),
                False,
                cause=e,
            )

        with self._lock:
            self._cache[key] = (payload, expires_at)

        return True

    def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key: The cache key to delete.

        Returns:
            Always True; deleting an absent key is not an error.
        """
        self._validator.validate(key)

        with self._lock:
            self._cache.pop(key, None)

        return True

    def clear(self) -> bool:
        """Clear all cached values."""
        with self._lock:
            self._cache.clear()
        return True

    def has(self, key: str) -> bool:
        """Check if key exists in cache.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists and has not expired.
        """
        self._validator.validate(key)

        with self._lock:
            return key in self._cache

    def get_multiple(
        self,
        keys: Iterable[str],
        default: Any = None,
    ) -> dict[str, Any]:
        """Retrieve several values at once."""
        key_list = self._validator.validate_keys(keys)

        return {key: self.get(key, default) for key in key_list}

    def set_multiple(
        self,
        values: Mapping[str, Any] | Iterable[tuple[str, Any]],
        ttl: int | timedelta | None = None,
    ) -> bool:
        """Store several values with the same TTL."""
        items = self._validator.validate_items(values)

        success = True
        for key, value in items:
            success = self.set(key, value, ttl) and success

        return success

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        """Delete several keys at once."""
        key_list = self._validator.validate_keys(keys)

        with self._lock:
            for key in key_list:
                self._cache.pop(key, None)

        return True

    def gc(self) -> int:
        """Purge expired items.

        Returns:
            Number of items removed.
        """
        with self._lock:
            return len(self._cache.expire())

    def __len__(self) -> int:
        """Return the number of items in the cache."""
        with self._lock:
            return len(self._cache)

    @property
    def maxsize(self) -> int:
        """Return the maximum size of the cache."""
        return self._maxsize
