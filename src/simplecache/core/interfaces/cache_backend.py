"""Cache backend interface."""

from collections.abc import Iterable, Mapping
from datetime import timedelta
from typing import Any, Protocol

from simplecache.core.entities.error_mode import ErrorMode


class ICacheBackend(Protocol):
    """Contract for cache storage backends.

    Every backend implements the same operation set so callers
    can swap storage without changing behavior. Methods are
    synchronous and block until the storage round-trip completes.
    """

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.
            default: Value returned when the key is missing or expired.

        Returns:
            The cached value, or default.
        """
        ...

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
            ttl: Optional time-to-live. None means no expiry; a TTL
                that resolves to zero or less deletes the key.

        Returns:
            True on success.
        """
        ...

    def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key is gone afterwards (absent keys included).
        """
        ...

    def clear(self) -> bool:
        """Clear all cached values owned by this backend."""
        ...

    def has(self, key: str) -> bool:
        """Check if key exists in cache.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists and has not expired.
        """
        ...

    def get_multiple(
        self,
        keys: Iterable[str],
        default: Any = None,
    ) -> dict[str, Any]:
        """Retrieve several values at once.

        Args:
            keys: Keys to retrieve. Duplicates are ignored.
            default: Value used for missing keys.

        Returns:
            Mapping of every requested key to its value or default.
        """
        ...

    def set_multiple(
        self,
        values: Mapping[str, Any] | Iterable[tuple[str, Any]],
        ttl: int | timedelta | None = None,
    ) -> bool:
        """Store several values with the same TTL.

        Args:
            values: Mapping (or key/value pairs) to store.
            ttl: Optional time-to-live applied to every value.

        Returns:
            True if every value was stored.
        """
        ...

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        """Delete several keys at once.

        Args:
            keys: Keys to delete. Duplicates are ignored.

        Returns:
            True on success.
        """
        ...

    def set_mode(self, mode: ErrorMode | str) -> None:
        """Change the error handling mode for subsequent operations.

        Args:
            mode: ErrorMode.THROW or ErrorMode.FAIL.
        """
        ...
