"""Exception hierarchy for simplecache."""


class CacheError(Exception):
    """Base class for every error raised by simplecache."""

    pass


class InvalidKeyError(CacheError, ValueError):
    """Raised when a key (or batch of keys) is malformed.

    This is a caller error and is raised regardless of the
    backend's error mode.
    """

    pass


class CacheOperationError(CacheError):
    """Raised when the underlying storage fails.

    Filesystem failures, Redis transport faults and value
    serialization failures all surface as this error. Whether it
    reaches the caller depends on the backend's error mode.
    """

    pass


class SerializationError(CacheError):
    """Raised when serialization or deserialization fails."""

    pass
