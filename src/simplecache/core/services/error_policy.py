"""Error policy deciding how storage faults reach the caller."""

import logging
from typing import TypeVar

from simplecache.core.entities.error_mode import ErrorMode
from simplecache.core.errors import CacheOperationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorPolicy:
    """Raise or degrade storage faults according to an ErrorMode.

    The mode is plain mutable state: changing it affects every fault
    handled afterwards, including faults raised by operations that
    started before the change.
    """

    def __init__(self, mode: ErrorMode | str = ErrorMode.THROW) -> None:
        """Initialize the policy.

        Args:
            mode: Initial error mode.
        """
        self._mode = ErrorMode.coerce(mode)

    @property
    def mode(self) -> ErrorMode:
        """Get the current error mode."""
        return self._mode

    @mode.setter
    def mode(self, mode: ErrorMode | str) -> None:
        self._mode = ErrorMode.coerce(mode)

    def handle(
        self,
        error: CacheOperationError,
        fallback: T,
        cause: BaseException | None = None,
    ) -> T:
        """Apply the policy to a storage fault.

        Args:
            error: The fault, already wrapped as CacheOperationError.
            fallback: Value returned under ErrorMode.FAIL.
            cause: The underlying exception, chained onto the raised error.

        Returns:
            The fallback value.

        Raises:
            CacheOperationError: Under ErrorMode.THROW.
        """
        if self._mode is ErrorMode.THROW:
            if cause is not None:
                raise error from cause
            raise error

        logger.warning("Cache operation failed, returning fallback: %s", error)
        return fallback
