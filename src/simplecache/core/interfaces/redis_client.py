"""Redis client interface."""

from collections.abc import Iterator, Mapping, Sequence
from typing import Any, Protocol


class IRedisClient(Protocol):
    """The subset of the redis-py client used by RedisCacheBackend.

    ``redis.Redis`` satisfies this protocol, as does
    ``fakeredis.FakeRedis``. Clients must return raw bytes
    (``decode_responses=False``).
    """

    def ping(self) -> Any: ...

    def get(self, name: str) -> bytes | None: ...

    def set(self, name: str, value: bytes) -> Any: ...

    def setex(self, name: str, time: int, value: bytes) -> Any: ...

    def mget(self, keys: Sequence[str]) -> list[bytes | None]: ...

    def mset(self, mapping: Mapping[str, bytes]) -> Any: ...

    def delete(self, *names: str) -> int: ...

    def exists(self, *names: str) -> int: ...

    def scan_iter(self, match: str | None = None, count: int | None = None) -> Iterator[Any]: ...
