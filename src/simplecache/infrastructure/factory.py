"""Factory building cache backends from configuration."""

import logging

import redis

from simplecache.core.entities.cache_config import CacheConfig
from simplecache.core.interfaces.cache_backend import ICacheBackend
from simplecache.core.interfaces.redis_client import IRedisClient
from simplecache.core.interfaces.serializer import ISerializer
from simplecache.infrastructure.backends.file import FileCacheBackend
from simplecache.infrastructure.backends.memory import InMemoryCacheBackend
from simplecache.infrastructure.backends.redis import RedisCacheBackend
from simplecache.infrastructure.serializers.json import JsonSerializer
from simplecache.infrastructure.serializers.pickle import PickleSerializer

logger = logging.getLogger(__name__)


def create_serializer(name: str) -> ISerializer:
    """Create a serializer by name ("pickle" or "json")."""
    if name == "json":
        return JsonSerializer()
    if name == "pickle":
        return PickleSerializer()
    raise ValueError(f"Unknown serializer: {name!r}")


def create_backend(
    config: CacheConfig | None = None,
    redis_client: IRedisClient | None = None,
) -> ICacheBackend:
    """Create the backend described by a configuration.

    Args:
        config: Cache configuration. Uses defaults (file backend) if None.
        redis_client: Client for the Redis backend. If None, one is
            created from ``config.redis_url``.

    Returns:
        A ready-to-use cache backend.

    Example:
        >>> backend = create_backend(CacheConfig(backend="memory"))
        >>> backend.set("greeting", "hello")
        True
    """
    config = config or CacheConfig()
    serializer = create_serializer(config.serializer)

    if config.backend == "redis":
        if redis_client is None:
            redis_client = redis.Redis.from_url(
                config.redis_url,
                decode_responses=False,
            )
        logger.info("Creating Redis cache backend (%s)", config.redis_url)
        return RedisCacheBackend(
            redis_client,
            mode=config.mode,
            key_prefix=config.key_prefix,
            serializer=serializer,
        )

    if config.backend == "memory":
        logger.info("Creating in-memory cache backend")
        return InMemoryCacheBackend(
            maxsize=config.memory_maxsize,
            mode=config.mode,
            serializer=serializer,
        )

    logger.info("Creating file cache backend (%s)", config.directory)
    return FileCacheBackend(
        config.directory,  # type: ignore[arg-type]
        mode=config.mode,
        serializer=serializer,
    )
