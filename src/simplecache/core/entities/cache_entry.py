"""Cache entry entity."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """Immutable cache entry value object.

    Represents a cached value together with its absolute expiry
    instant (epoch seconds). An entry without expiry never expires.
    """

    value: Any
    expires_at: float | None = None

    def is_expired(self, now: float) -> bool:
        """Check if entry has expired.

        Args:
            now: Current time as epoch seconds.

        Returns:
            True if the expiry instant is at or before now.
        """
        return self.expires_at is not None and self.expires_at <= now

    def to_dict(self) -> dict[str, Any]:
        """Return the persisted form of this entry."""
        return {"value": self.value, "expires_at": self.expires_at}

    @classmethod
    def from_dict(cls, data: Any) -> "CacheEntry":
        """Rebuild an entry from its persisted form.

        Args:
            data: The deserialized payload.

        Returns:
            A new CacheEntry instance.

        Raises:
            ValueError: If the payload is not a well-formed entry.
        """
        if not isinstance(data, Mapping):
            raise ValueError("Cache entry must be a mapping")
        if "value" not in data or "expires_at" not in data:
            raise ValueError("Cache entry must contain 'value' and 'expires_at'")

        expires_at = data["expires_at"]
        if expires_at is not None:
            if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
                raise ValueError("Cache entry 'expires_at' must be a number or None")
            expires_at = float(expires_at)

        return cls(value=data["value"], expires_at=expires_at)
