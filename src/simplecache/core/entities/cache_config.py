"""Cache configuration entity."""

import os
import sys
import tempfile
from dataclasses import dataclass

from simplecache.core.entities.error_mode import ErrorMode

BACKENDS = ("file", "redis", "memory")
SERIALIZERS = ("pickle", "json")


@dataclass
class CacheConfig:
    """Cache configuration.

    Describes which backend to build and how. Consumed by
    ``create_backend`` and ``Cache.from_config``.

    File backend:
        Entries are stored under ``directory``, which defaults to a
        ``simplecache`` folder inside the system temp directory.

    Redis backend:
        A client is created from ``redis_url`` unless one is passed
        to the factory explicitly. Keys are stored as
        ``"<key_prefix>:<key>"``.
    """

    backend: str = "file"
    directory: str | None = None
    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = "cache"

    # Error handling
    mode: ErrorMode | str = ErrorMode.THROW

    # Value encoding ("pickle" or "json")
    serializer: str = "pickle"

    # In-memory backend capacity (effectively unbounded by default)
    memory_maxsize: int = sys.maxsize

    def __post_init__(self) -> None:
        """Normalize and validate the configuration."""
        if self.backend not in BACKENDS:
            raise ValueError(
                f"Unknown cache backend: {self.backend!r} (expected one of {BACKENDS})"
            )
        if self.serializer not in SERIALIZERS:
            raise ValueError(
                f"Unknown serializer: {self.serializer!r} (expected one of {SERIALIZERS})"
            )
        if self.memory_maxsize <= 0:
            raise ValueError("memory_maxsize must be positive")

        self.mode = ErrorMode.coerce(self.mode)

        if self.directory is None:
            self.directory = os.path.join(tempfile.gettempdir(), "simplecache")
