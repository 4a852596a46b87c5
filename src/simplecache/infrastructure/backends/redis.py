"""Redis cache backend implementation."""

import logging
import time
from collections.abc import Iterable, Mapping
from datetime import timedelta
from typing import Any

from redis.exceptions import RedisError

from simplecache.core.entities.error_mode import ErrorMode
from simplecache.core.errors import CacheOperationError, SerializationError
from simplecache.core.interfaces.redis_client import IRedisClient
from simplecache.core.interfaces.serializer import ISerializer
from simplecache.core.services.error_policy import ErrorPolicy
from simplecache.core.services.key_validator import NAMESPACED_KEY_VALIDATOR
from simplecache.core.services.ttl_resolver import resolve_seconds
from simplecache.infrastructure.serializers.pickle import PickleSerializer

logger = logging.getLogger(__name__)


class RedisCacheBackend:
    """Redis cache backend for distributed deployments.

    Wraps an already-connected client. Every key is stored under
    ``"<key_prefix>:<key>"`` and values are encoded by the backend's
    serializer, so any structured value round-trips through plain
    GET/SET. Batch reads and writes use MGET, MSET and multi-key DEL
    so they cost one round trip regardless of key count.

    Transport faults (``redis.exceptions.RedisError``) are mapped to
    CacheOperationError and handled per the error mode.
    """

    def __init__(
        self,
        client: IRedisClient,
        mode: ErrorMode | str = ErrorMode.THROW,
        key_prefix: str = "cache",
        serializer: ISerializer | None = None,
    ) -> None:
        """Initialize the Redis cache backend.

        Args:
            client: Connected Redis client (``decode_responses=False``).
            mode: Error handling mode for transport faults.
            key_prefix: Namespace prefix for all cache keys.
            serializer: Value serializer. Defaults to PickleSerializer.

        Raises:
            CacheOperationError: If the client is not connected and the
                mode is THROW. In FAIL mode the failure is deferred to
                the first operation.
        """
        self._redis = client
        self._policy = ErrorPolicy(mode)
        self._key_prefix = key_prefix
        self._serializer = serializer or PickleSerializer()
        self._validator = NAMESPACED_KEY_VALIDATOR

        try:
            self._redis.ping()
        except RedisError as e:
            if self._policy.mode is ErrorMode.THROW:
                raise CacheOperationError("Redis connection is not established") from e
            logger.warning("Redis connection is not established: %s", e)
        else:
            logger.info("Redis cache initialized (prefix=%r)", key_prefix)

    @property
    def key_prefix(self) -> str:
        """Return the key prefix."""
        return self._key_prefix

    @property
    def mode(self) -> ErrorMode:
        """Return the current error mode."""
        return self._policy.mode

    def set_mode(self, mode: ErrorMode | str) -> None:
        """Set error handling mode at runtime.

        Args:
            mode: ErrorMode.THROW or ErrorMode.FAIL.
        """
        self._policy.mode = mode

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.
            default: Value returned on a miss.

        Returns:
            The cached value, or default if missing (or on a fault in
            FAIL mode).
        """
        self._validator.validate(key)

        try:
            raw = self._redis.get(self._prefixed_key(key))
        except RedisError as e:
            return self._fault("get", e, default)

        if raw is None:
            return default
        return self._decode(key, raw, default)

    def set(
        self,
        key: str,
        value: Any,
        ttl: int | timedelta | None = None,
    ) -> bool:
        """Store value with optional TTL.

        Uses SET without a TTL and SETEX with a positive TTL; a TTL
        of zero or less deletes the key.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: Optional time-to-live.

        Returns:
            True on success, False on a fault in FAIL mode.
        """
        self._validator.validate(key)

        ttl_seconds = resolve_seconds(ttl, time.time())

        if ttl_seconds is not None and ttl_seconds <= 0:
            return self.delete(key)

        prefixed_key = self._prefixed_key(key)

        try:
            payload = self._serializer.serialize(value)
            if ttl_seconds is None:
                result = self._redis.set(prefixed_key, payload)
            else:
                result = self._redis.setex(prefixed_key, ttl_seconds, payload)
        except (RedisError, SerializationError) as e:
            return self._fault("set", e, False)

        return bool(result)

    def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key: The cache key to delete.

        Returns:
            True whether or not the key existed; False on a fault in
            FAIL mode.
        """
        self._validator.validate(key)

        try:
            removed = self._redis.delete(self._prefixed_key(key))
        except RedisError as e:
            return self._fault("del", e, False)

        return removed >= 0

    def clear(self) -> bool:
        """Clear all cached values with our prefix.

        Note: This only clears keys with our prefix, not the entire Redis DB.

        Returns:
            True on success, False on a fault in FAIL mode.
        """
        pattern = f"{self._key_prefix}:*"

        try:
            # SCAN instead of KEYS for production safety
            keys = list(self._redis.scan_iter(match=pattern, count=100))
            if not keys:
                return True
            removed = self._redis.delete(*keys)
        except RedisError as e:
            return self._fault("clear", e, False)

        logger.debug("Cleared %d keys matching %s", removed, pattern)
        return True

    def has(self, key: str) -> bool:
        """Check if key exists in cache.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists, False otherwise (or on a fault in
            FAIL mode).
        """
        self._validator.validate(key)

        try:
            result = self._redis.exists(self._prefixed_key(key))
        except RedisError as e:
            return self._fault("exists", e, False)

        return isinstance(result, int) and result > 0

    def get_multiple(
        self,
        keys: Iterable[str],
        default: Any = None,
    ) -> dict[str, Any]:
        """Retrieve several values with a single MGET.

        Args:
            keys: Keys to retrieve. Duplicates are ignored.
            default: Value used for missing keys.

        Returns:
            Mapping of every requested key to its value or default. On a
            fault in FAIL mode every key maps to default.
        """
        key_list = self._validator.validate_keys(keys)

        if not key_list:
            return {}

        prefixed_keys = [self._prefixed_key(key) for key in key_list]

        try:
            raw_values = self._redis.mget(prefixed_keys)
        except RedisError as e:
            return self._fault("mget", e, dict.fromkeys(key_list, default))

        return {
            key: default if raw is None else self._decode(key, raw, default)
            for key, raw in zip(key_list, raw_values)
        }

    def set_multiple(
        self,
        values: Mapping[str, Any] | Iterable[tuple[str, Any]],
        ttl: int | timedelta | None = None,
    ) -> bool:
        """Store several values with the same TTL.

        Without a TTL a single atomic MSET is issued. MSET cannot carry
        an expiry, so with a positive TTL each key is written with its
        own SETEX; a TTL of zero or less deletes the keys. Every key is
        validated before anything is written.

        Args:
            values: Mapping (or key/value pairs) to store.
            ttl: Optional time-to-live applied to every value.

        Returns:
            True if every value was stored.
        """
        items = self._validator.validate_items(values)

        if not items:
            return True

        ttl_seconds = resolve_seconds(ttl, time.time())

        if ttl_seconds is None:
            try:
                mapping = {
                    self._prefixed_key(key): self._serializer.serialize(value)
                    for key, value in items
                }
                return bool(self._redis.mset(mapping))
            except (RedisError, SerializationError) as e:
                return self._fault("mset", e, False)

        if ttl_seconds <= 0:
            return self.delete_multiple([key for key, _ in items])

        success = True
        for key, value in items:
            success = self.set(key, value, ttl_seconds) and success

        return success

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        """Delete several keys with a single DEL.

        Args:
            keys: Keys to delete. Duplicates are ignored.

        Returns:
            True whether or not the keys existed; False on a fault in
            FAIL mode.
        """
        key_list = self._validator.validate_keys(keys)

        if not key_list:
            return True

        try:
            removed = self._redis.delete(*(self._prefixed_key(key) for key in key_list))
        except RedisError as e:
            return self._fault("del", e, False)

        return removed >= 0

    def _decode(self, key: str, raw: bytes, default: Any) -> Any:
        """Deserialize a stored payload, treating garbage as a miss."""
        try:
            return self._serializer.deserialize(raw)
        except SerializationError as e:
            logger.warning("Ignoring undecodable cache value for key %r: %s", key, e)
            return default

    def _fault(self, operation: str, error: Exception, fallback: Any) -> Any:
        """Map a transport or serialization fault through the error policy."""
        return self._policy.handle(
            CacheOperationError(f"Redis {operation} operation failed: {error}"),
            fallback,
            cause=error,
        )

    def _prefixed_key(self, key: str) -> str:
        """Add the namespace prefix to a key.

        Args:
            key: The cache key.

        Returns:
            The key with prefix.
        """
        return f"{self._key_prefix}:{key}"
