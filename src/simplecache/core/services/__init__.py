"""Domain services for simplecache."""

from simplecache.core.services.cache import Cache
from simplecache.core.services.error_policy import ErrorPolicy
from simplecache.core.services.key_validator import (
    NAMESPACED_KEY_VALIDATOR,
    STRICT_KEY_VALIDATOR,
    KeyValidator,
)
from simplecache.core.services.ttl_resolver import (
    is_expired,
    resolve_expires_at,
    resolve_seconds,
)

__all__ = [
    "Cache",
    "ErrorPolicy",
    # Key validation
    "KeyValidator",
    "STRICT_KEY_VALIDATOR",
    "NAMESPACED_KEY_VALIDATOR",
    # TTL resolution
    "resolve_expires_at",
    "resolve_seconds",
    "is_expired",
]
