"""Test configuration and fixtures."""

import time

import pytest

from step_retry.observability.logging import setup_testing_logging
from step_retry.retry import CancellationSignal, Failure


@pytest.fixture(autouse=True, scope="session")
def configure_test_logging():
    """Keep log output quiet during tests."""
    setup_testing_logging()


@pytest.fixture
def signal():
    """Create a cancellation signal that is cleaned up after the test."""
    cancellation = CancellationSignal()
    yield cancellation
    cancellation.close()


class FlakyStep:
    """Step that fails a fixed number of times before succeeding.

    ``failures=None`` fails forever. Attempt timestamps and the contexts the
    step was invoked with are recorded for assertions.
    """

    def __init__(self, failures: int | None = 0, name: str = "step"):
        self.failures = failures
        self.name = name
        self.calls = 0
        self.timestamps: list[float] = []
        self.contexts = []

    async def __call__(self, ctx):
        self.calls += 1
        self.timestamps.append(time.monotonic())
        self.contexts.append(ctx)
        if self.failures is None or self.calls <= self.failures:
            return Failure(RuntimeError(f"{self.name} failure {self.calls}"))
        return None

    @property
    def gaps(self) -> list[float]:
        return [b - a for a, b in zip(self.timestamps, self.timestamps[1:])]


@pytest.fixture
def flaky_step():
    """Factory for FlakyStep instances."""
    return FlakyStep
