"""Hashing utilities for cache storage locations."""

import hashlib


def key_digest(key: str) -> str:
    """Create a deterministic, filesystem-safe digest of a cache key.

    Args:
        key: The raw (unprefixed) cache key.

    Returns:
        The full hexadecimal SHA-256 digest of the key.
    """
    return hashlib.sha256(key.encode("utf-8")).hexdigest()
