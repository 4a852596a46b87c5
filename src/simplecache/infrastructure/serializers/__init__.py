"""Value serializers for simplecache backends."""

from simplecache.infrastructure.serializers.json import JsonSerializer
from simplecache.infrastructure.serializers.pickle import PickleSerializer

__all__ = [
    "JsonSerializer",
    "PickleSerializer",
]
