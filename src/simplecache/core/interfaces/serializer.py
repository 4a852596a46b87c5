"""Value encoding interface shared by the cache backends."""

from typing import Any, Protocol


class ISerializer(Protocol):
    """Turns cached values into bytes and back.

    What gets encoded depends on the backend: FileCacheBackend hands
    over the whole entry mapping ``{"value": ..., "expires_at": ...}``
    since the expiry lives in the file, while RedisCacheBackend and
    InMemoryCacheBackend encode the bare value and keep the expiry
    in their storage.

    Both methods report failures as
    ``simplecache.core.errors.SerializationError``; backends map it
    to CacheOperationError on writes and to a cache miss on reads.
    """

    def serialize(self, value: Any) -> bytes:
        """Encode a value (or an entry mapping) for storage.

        Raises:
            SerializationError: If the value has no byte encoding.
        """
        ...

    def deserialize(self, data: bytes) -> Any:
        """Decode bytes previously produced by ``serialize``.

        Raises:
            SerializationError: If the bytes are malformed.
        """
        ...
