"""Utility helpers for simplecache."""

from simplecache.utils.hashing import key_digest

__all__ = ["key_digest"]
