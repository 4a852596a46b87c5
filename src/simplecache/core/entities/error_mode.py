"""Error mode entity."""

from enum import Enum


class ErrorMode(Enum):
    """How a backend reacts to storage faults.

    THROW: Raise CacheOperationError at the call site.
    FAIL: Swallow the fault and return the degraded result
        (the default for reads, False for writes).
    """

    THROW = "THROW"
    FAIL = "FAIL"

    @classmethod
    def coerce(cls, mode: "ErrorMode | str") -> "ErrorMode":
        """Convert a mode or its case-insensitive name to an ErrorMode.

        Args:
            mode: An ErrorMode member or one of "throw" / "fail".

        Returns:
            The matching ErrorMode.

        Raises:
            ValueError: If the name is unknown.
        """
        if isinstance(mode, cls):
            return mode
        if isinstance(mode, str):
            try:
                return cls[mode.upper()]
            except KeyError:
                pass
        raise ValueError(f"Unknown error mode: {mode!r}")
