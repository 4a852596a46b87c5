"""Tests for the value serializers."""

import pickle
import threading
from datetime import date, datetime
from pathlib import Path
from unittest.mock import MagicMock

import fakeredis
import pytest

from simplecache.core.errors import SerializationError
from simplecache.infrastructure.backends.file import FileCacheBackend
from simplecache.infrastructure.backends.memory import InMemoryCacheBackend
from simplecache.infrastructure.backends.redis import RedisCacheBackend
from simplecache.infrastructure.serializers.json import JsonSerializer
from simplecache.infrastructure.serializers.pickle import PickleSerializer


class TestJsonSerializer:
    """Tests for JsonSerializer."""

    @pytest.fixture
    def serializer(self) -> JsonSerializer:
        """Create a serializer for testing."""
        return JsonSerializer()

    def test_serialize_dict(self, serializer: JsonSerializer) -> None:
        """Test serializing a dictionary."""
        data = {"name": "Alice", "age": 30}
        result = serializer.serialize(data)

        assert isinstance(result, bytes)
        assert b"Alice" in result
        assert b"30" in result

    def test_deserialize_dict(self, serializer: JsonSerializer) -> None:
        """Test deserializing to a dictionary."""
        data = b'{"name": "Alice", "age": 30}'
        result = serializer.deserialize(data)

        assert result == {"name": "Alice", "age": 30}

    def test_serialize_nested(self, serializer: JsonSerializer) -> None:
        """Test serializing nested structures."""
        data = {"level1": {"level2": {"level3": ["a", "b", "c"]}}}

        assert serializer.deserialize(serializer.serialize(data)) == data

    def test_datetime_restored(self, serializer: JsonSerializer) -> None:
        """Test datetime values come back as datetimes."""
        dt = datetime(2024, 1, 15, 10, 30, 0)

        result = serializer.deserialize(serializer.serialize({"timestamp": dt}))

        assert result == {"timestamp": dt}

    def test_date_restored(self, serializer: JsonSerializer) -> None:
        """Test date values come back as dates."""
        d = date(2024, 1, 15)

        result = serializer.deserialize(serializer.serialize([d]))

        assert result == [d]
        assert type(result[0]) is date

    def test_tagged_lookalike_with_extra_fields_untouched(self, serializer: JsonSerializer) -> None:
        """Test only single-field tagged objects are decoded."""
        data = {"__date__": "2024-01-15", "other": 1}

        assert serializer.deserialize(serializer.serialize(data)) == data

    def test_file_entry_payload(self, serializer: JsonSerializer) -> None:
        """Test an entry mapping with a dated value keeps its expiry as a float."""
        entry = {"value": {"seen": datetime(2024, 1, 15, 10, 30)}, "expires_at": 1700000060.0}

        encoded = serializer.serialize(entry)

        assert b'"expires_at": 1700000060.0' in encoded
        assert serializer.deserialize(encoded) == entry

    def test_tuples_come_back_as_lists(self, serializer: JsonSerializer) -> None:
        """Test only JSON types round-trip exactly."""
        assert serializer.deserialize(serializer.serialize({"pair": (1, 2)})) == {"pair": [1, 2]}

    def test_serialize_none(self, serializer: JsonSerializer) -> None:
        """Test serializing None."""
        assert serializer.deserialize(serializer.serialize(None)) is None

    def test_deserialize_invalid_json(self, serializer: JsonSerializer) -> None:
        """Test deserializing invalid JSON raises error."""
        with pytest.raises(SerializationError):
            serializer.deserialize(b"not valid json")

    def test_deserialize_invalid_encoding(self, serializer: JsonSerializer) -> None:
        """Test deserializing invalid encoding raises error."""
        with pytest.raises(SerializationError):
            serializer.deserialize(b"\xff\xfe")

    def test_serialize_circular(self, serializer: JsonSerializer) -> None:
        """Test serializing circular references raises error."""
        circular: dict = {}
        circular["self"] = circular

        with pytest.raises(SerializationError):
            serializer.serialize(circular)

    def test_serialize_unsupported_type(self, serializer: JsonSerializer) -> None:
        """Test arbitrary objects are rejected."""
        with pytest.raises(SerializationError, match="not JSON serializable"):
            serializer.serialize(object())

    def test_custom_encoding(self) -> None:
        """Test serializer with custom encoding."""
        serializer = JsonSerializer(encoding="utf-16")
        data = {"name": "Alice"}

        assert serializer.deserialize(serializer.serialize(data)) == data


class TestPickleSerializer:
    """Tests for PickleSerializer."""

    @pytest.fixture
    def serializer(self) -> PickleSerializer:
        """Create a serializer for testing."""
        return PickleSerializer()

    def test_preserves_python_types(self, serializer: PickleSerializer) -> None:
        """Test tuples, sets and datetimes keep their types."""
        data = {
            "tuple": (1, "two"),
            "set": {1, 2, 3},
            "when": datetime(2024, 1, 15, 10, 30),
            "bytes": b"\x00\x01",
        }

        assert serializer.deserialize(serializer.serialize(data)) == data

    def test_protocol(self) -> None:
        """Test the configured protocol is used."""
        serializer = PickleSerializer(protocol=2)

        assert serializer.serialize("value")[:2] == b"\x80\x02"

    def test_serialize_unpicklable(self, serializer: PickleSerializer) -> None:
        """Test objects that cannot be pickled raise error."""
        with pytest.raises(SerializationError):
            serializer.serialize(threading.Lock())

    def test_serialize_lambda(self, serializer: PickleSerializer) -> None:
        """Test local functions cannot be pickled."""
        with pytest.raises(SerializationError):
            serializer.serialize(lambda: None)

    @pytest.mark.parametrize("data", [b"", b"garbage", b"\x80\x05garbage"])
    def test_deserialize_invalid(self, serializer: PickleSerializer, data: bytes) -> None:
        """Test malformed input raises error."""
        with pytest.raises(SerializationError):
            serializer.deserialize(data)

    def test_reads_data_from_other_protocols(self, serializer: PickleSerializer) -> None:
        """Test values pickled elsewhere are readable."""
        assert serializer.deserialize(pickle.dumps([1, 2], protocol=0)) == [1, 2]


class TestBackendPayloads:
    """What each backend hands to its serializer."""

    @pytest.fixture
    def spy(self) -> MagicMock:
        """Create a serializer that records its calls."""
        return MagicMock(wraps=PickleSerializer())

    def test_file_backend_encodes_entry_mapping(self, spy: MagicMock, tmp_path: Path, clock) -> None:
        """Test the file backend stores the value together with its expiry."""
        backend = FileCacheBackend(tmp_path, serializer=spy, clock=clock)

        backend.set("key", "value", 60)

        spy.serialize.assert_called_once_with({"value": "value", "expires_at": clock.now + 60})

    def test_redis_backend_encodes_raw_value(self, spy: MagicMock) -> None:
        """Test the Redis backend leaves expiry to Redis."""
        backend = RedisCacheBackend(fakeredis.FakeRedis(), serializer=spy)

        backend.set("key", "value", 60)

        spy.serialize.assert_called_once_with("value")

    def test_memory_backend_encodes_raw_value(self, spy: MagicMock, clock) -> None:
        """Test the in-memory backend keeps the expiry beside the bytes."""
        backend = InMemoryCacheBackend(serializer=spy, clock=clock)

        backend.set("key", "value", 60)

        spy.serialize.assert_called_once_with("value")
