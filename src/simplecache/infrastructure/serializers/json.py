"""JSON serializer implementation."""

import json
from datetime import date, datetime
from typing import Any

from simplecache.core.errors import SerializationError

DATETIME_TAG = "__datetime__"
DATE_TAG = "__date__"


class JsonSerializer:
    """Human-readable alternative to PickleSerializer.

    Cache files and Redis values stay inspectable, at the cost of
    only round-tripping JSON types: tuples come back as lists and
    arbitrary objects are rejected. ``datetime`` and ``date`` values
    are written as single-field tagged objects and restored on read.
    A file backend entry therefore looks like
    ``{"value": ..., "expires_at": 1700000060.0}``.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize the JSON serializer.

        Args:
            encoding: Text encoding of the stored bytes.
        """
        self._encoding = encoding

    def serialize(self, value: Any) -> bytes:
        """Encode a JSON-compatible value.

        Raises:
            SerializationError: For unsupported types and circular
                references.
        """
        try:
            return json.dumps(value, default=self._encode_tagged).encode(self._encoding)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to serialize value: {e}") from e

    def deserialize(self, data: bytes) -> Any:
        """Decode stored bytes, restoring tagged dates.

        Raises:
            SerializationError: If the bytes are not valid JSON text in
                the configured encoding.
        """
        try:
            return json.loads(data.decode(self._encoding), object_hook=self._decode_tagged)
        except (UnicodeDecodeError, ValueError) as e:
            raise SerializationError(f"Failed to deserialize data: {e}") from e

    @staticmethod
    def _encode_tagged(obj: Any) -> dict[str, str]:
        # datetime first: it is a date subclass
        if isinstance(obj, datetime):
            return {DATETIME_TAG: obj.isoformat()}
        if isinstance(obj, date):
            return {DATE_TAG: obj.isoformat()}
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

    @staticmethod
    def _decode_tagged(obj: dict[str, Any]) -> Any:
        if len(obj) == 1:
            if DATETIME_TAG in obj:
                return datetime.fromisoformat(obj[DATETIME_TAG])
            if DATE_TAG in obj:
                return date.fromisoformat(obj[DATE_TAG])
        return obj
