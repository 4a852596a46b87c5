"""Tests for ErrorPolicy."""

import logging

import pytest

from simplecache.core.entities import ErrorMode
from simplecache.core.errors import CacheOperationError
from simplecache.core.services.error_policy import ErrorPolicy


class TestErrorPolicy:
    """Tests for ErrorPolicy."""

    def test_default_mode_is_throw(self) -> None:
        """Test THROW is the default mode."""
        assert ErrorPolicy().mode is ErrorMode.THROW

    def test_throw_raises_with_cause(self) -> None:
        """Test THROW raises the error with the cause chained."""
        policy = ErrorPolicy(ErrorMode.THROW)
        cause = OSError("disk full")

        with pytest.raises(CacheOperationError, match="write failed") as exc_info:
            policy.handle(CacheOperationError("write failed"), False, cause=cause)

        assert exc_info.value.__cause__ is cause

    def test_fail_returns_fallback(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test FAIL returns the fallback and logs a warning."""
        policy = ErrorPolicy(ErrorMode.FAIL)

        with caplog.at_level(logging.WARNING, logger="simplecache"):
            result = policy.handle(CacheOperationError("read failed"), "default")

        assert result == "default"
        assert "read failed" in caplog.text

    def test_mode_is_mutable(self) -> None:
        """Test switching the mode affects later faults."""
        policy = ErrorPolicy(ErrorMode.THROW)
        policy.mode = "fail"

        assert policy.mode is ErrorMode.FAIL
        assert policy.handle(CacheOperationError("boom"), None) is None

        policy.mode = ErrorMode.THROW
        with pytest.raises(CacheOperationError):
            policy.handle(CacheOperationError("boom"), None)
