"""Pickle serializer implementation."""

import pickle
from typing import Any

from simplecache.core.errors import SerializationError


class PickleSerializer:
    """Pickle serializer for cache values.

    Round-trips arbitrary Python objects (tuples, sets, dataclasses,
    datetimes...). Only use it with storage you trust: unpickling
    data written by someone else can execute code.
    """

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL) -> None:
        """Initialize the pickle serializer.

        Args:
            protocol: Pickle protocol version to write.
        """
        self._protocol = protocol

    def serialize(self, value: Any) -> bytes:
        """Serialize value to bytes.

        Raises:
            SerializationError: If the value cannot be pickled.
        """
        try:
            return pickle.dumps(value, protocol=self._protocol)
        except (pickle.PicklingError, TypeError, AttributeError, RecursionError) as e:
            raise SerializationError(f"Failed to serialize value: {e}") from e

    def deserialize(self, data: bytes) -> Any:
        """Deserialize bytes to value.

        Raises:
            SerializationError: If the data is not a valid pickle.
        """
        try:
            return pickle.loads(data)
        # pickle.loads can raise nearly anything on malformed input
        except Exception as e:
            raise SerializationError(f"Failed to deserialize data: {e}") from e
