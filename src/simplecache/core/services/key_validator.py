"""Key validation shared by every cache backend."""

import re
from collections.abc import Iterable, Mapping
from typing import Any

from simplecache.core.errors import InvalidKeyError


class KeyValidator:
    """Validates cache keys against a fixed character class.

    Single keys go through ``validate``; batch inputs go through
    ``validate_keys`` / ``validate_items``, which check every
    element before returning so that a bad key aborts the batch
    before any storage is touched.
    """

    def __init__(self, pattern: str, allowed_description: str) -> None:
        """Initialize the validator.

        Args:
            pattern: Regular expression a key must fully match.
            allowed_description: Human-readable list of allowed
                characters, used in error messages.
        """
        self._pattern = re.compile(pattern)
        self._allowed_description = allowed_description

    @property
    def pattern(self) -> str:
        """Return the key pattern."""
        return self._pattern.pattern

    def validate(self, key: Any) -> None:
        """Validate a single key.

        Args:
            key: The candidate key.

        Raises:
            InvalidKeyError: If the key is not a non-empty string made of
                allowed characters.
        """
        if not isinstance(key, str):
            raise InvalidKeyError("Cache key must be a string")

        if key == "":
            raise InvalidKeyError("Cache key cannot be empty")

        if self._pattern.fullmatch(key) is None:
            raise InvalidKeyError(
                "Cache key contains invalid characters. "
                f"Only {self._allowed_description} are allowed."
            )

    def validate_keys(self, keys: Iterable[Any]) -> list[str]:
        """Validate and deduplicate a batch of keys.

        Args:
            keys: Any iterable of keys (consumed once).

        Returns:
            The keys in first-seen order without duplicates.

        Raises:
            InvalidKeyError: If the input is not an iterable of valid keys.
        """
        if isinstance(keys, (str, bytes)) or not isinstance(keys, Iterable):
            raise InvalidKeyError("Keys must be an iterable of strings")

        key_list = list(keys)
        for key in key_list:
            self.validate(key)

        return list(dict.fromkeys(key_list))

    def validate_items(
        self,
        values: Mapping[Any, Any] | Iterable[tuple[Any, Any]],
    ) -> list[tuple[str, Any]]:
        """Validate the keys of a batch of key/value pairs.

        Args:
            values: A mapping or an iterable of (key, value) pairs. For
                pairs, later duplicates replace earlier ones.

        Returns:
            Ordered (key, value) pairs.

        Raises:
            InvalidKeyError: If the input is malformed or any key is invalid.
        """
        if isinstance(values, Mapping):
            items = list(values.items())
        elif isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
            raise InvalidKeyError(
                "Values must be a mapping or an iterable of key/value pairs"
            )
        else:
            items = []
            for pair in values:
                if not isinstance(pair, (tuple, list)) or len(pair) != 2:
                    raise InvalidKeyError(
                        "Values must be a mapping or an iterable of key/value pairs"
                    )
                items.append((pair[0], pair[1]))

        for key, _ in items:
            self.validate(key)

        return list(dict(items).items())


# Letters, digits, underscore and dot (file names stay portable)
STRICT_KEY_VALIDATOR = KeyValidator(
    r"[A-Za-z0-9_.]+",
    "alphanumeric characters, underscores, and dots",
)

# Adds ":" and "-" as namespace separators
NAMESPACED_KEY_VALIDATOR = KeyValidator(
    r"[A-Za-z0-9_.:\-]+",
    "alphanumeric characters, underscores, dots, colons, and hyphens",
)
