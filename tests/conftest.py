"""Pytest configuration for simplecache tests."""

import pytest


class FakeClock:
    """Manually advanced wall clock returning epoch seconds."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock for deterministic expiry."""
    return FakeClock()
