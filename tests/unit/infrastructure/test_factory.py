"""Tests for the backend factory."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import fakeredis
import pytest

from simplecache.core.entities import CacheConfig, ErrorMode
from simplecache.infrastructure.backends.file import FileCacheBackend
from simplecache.infrastructure.backends.memory import InMemoryCacheBackend
from simplecache.infrastructure.backends.redis import RedisCacheBackend
from simplecache.infrastructure.factory import create_backend, create_serializer
from simplecache.infrastructure.serializers.json import JsonSerializer
from simplecache.infrastructure.serializers.pickle import PickleSerializer


class TestCreateSerializer:
    """Tests for create_serializer."""

    def test_known_names(self) -> None:
        """Test both serializers can be built by name."""
        assert isinstance(create_serializer("pickle"), PickleSerializer)
        assert isinstance(create_serializer("json"), JsonSerializer)

    def test_unknown_name(self) -> None:
        """Test unknown names are rejected."""
        with pytest.raises(ValueError, match="Unknown serializer"):
            create_serializer("yaml")


class TestCreateBackend:
    """Tests for create_backend."""

    def test_file_backend(self, tmp_path: Path) -> None:
        """Test the file backend honors directory and mode."""
        config = CacheConfig(directory=str(tmp_path / "cache"), mode="fail")

        backend = create_backend(config)

        assert isinstance(backend, FileCacheBackend)
        assert backend.directory == tmp_path / "cache"
        assert backend.mode is ErrorMode.FAIL

    def test_memory_backend(self) -> None:
        """Test the in-memory backend honors its size bound."""
        backend = create_backend(CacheConfig(backend="memory", memory_maxsize=10))

        assert isinstance(backend, InMemoryCacheBackend)
        assert backend.maxsize == 10

    def test_redis_backend_with_client(self) -> None:
        """Test a supplied Redis client is used as-is."""
        client = fakeredis.FakeRedis()
        config = CacheConfig(backend="redis", key_prefix="myapp", serializer="json")

        backend = create_backend(config, redis_client=client)

        assert isinstance(backend, RedisCacheBackend)
        assert backend.key_prefix == "myapp"
        backend.set("key", [1, 2])
        assert client.get("myapp:key") == b"[1, 2]"

    def test_redis_backend_from_url(self) -> None:
        """Test a client is created from the URL when none is supplied."""
        config = CacheConfig(backend="redis", redis_url="redis://cache.internal:6380/2")

        with patch("redis.Redis.from_url") as from_url:
            from_url.return_value = MagicMock()
            backend = create_backend(config)

        from_url.assert_called_once_with("redis://cache.internal:6380/2", decode_responses=False)
        assert isinstance(backend, RedisCacheBackend)

    def test_serializer_is_applied(self, tmp_path: Path) -> None:
        """Test the configured serializer reaches the backend."""
        backend = create_backend(CacheConfig(directory=str(tmp_path), serializer="json"))

        backend.set("key", {"a": 1})

        assert b'"a": 1' in next(tmp_path.glob("*.cache")).read_bytes()
