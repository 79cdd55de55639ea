"""Delay strategies.

A delay strategy maps the number of consecutive failures of the current step
to either ``Wait(seconds)`` (retry the step after that long) or ``Stop`` (give
up on the step and move on). Any callable with that shape can be handed to the
executor; the classes below are the built-in policies.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta

from tenacity import RetryCallState
from tenacity.stop import stop_base
from tenacity.wait import wait_base

from ..domain.exceptions import InvalidDelayError

DEFAULT_BASE_DELAY = 0.1


@dataclass(frozen=True)
class Wait:
    """Retry the current step after ``seconds``."""

    seconds: float

    def __post_init__(self) -> None:
        if self.seconds < 0:
            raise ValueError(f"Wait duration must be non-negative, got {self.seconds}")


@dataclass(frozen=True)
class Stop:
    """Retries for the current step are exhausted."""


STOP = Stop()

Delay = Wait | Stop
DelayStrategy = Callable[[int], Delay]


def _to_seconds(value: float | timedelta) -> float:
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


def normalize_delay(value: object, failures: int) -> Delay:
    """Coerce a strategy's return value into ``Wait`` or ``Stop``.

    Plain numbers are seconds and ``timedelta`` values are converted; ``None``
    means stop. Negative durations are rejected rather than read as "stop".
    """
    if isinstance(value, Wait | Stop):
        return value
    if value is None:
        return STOP
    if isinstance(value, bool) or not isinstance(value, int | float | timedelta):
        raise InvalidDelayError(value, failures)
    seconds = _to_seconds(value)
    if seconds < 0:
        raise InvalidDelayError(value, failures)
    return Wait(seconds)


class RetryStrategy(ABC):
    """Abstract base class for delay strategies."""

    @abstractmethod
    def next_delay(self, failures: int) -> Delay:
        """Calculate the delay after ``failures`` consecutive failures."""
        pass

    def __call__(self, failures: int) -> Delay:
        return self.next_delay(failures)


class FixedDelayStrategy(RetryStrategy):
    """Same delay after every failure, retrying without limit."""

    def __init__(self, delay: float | timedelta):
        seconds = _to_seconds(delay)
        if seconds < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        self.delay = seconds

    def next_delay(self, failures: int) -> Delay:
        return Wait(self.delay)

    def __repr__(self) -> str:
        return f"FixedDelayStrategy(delay={self.delay})"


class ExponentialBackoffStrategy(RetryStrategy):
    """Exponential backoff starting at ``base_delay`` and doubling per failure.

    ``max_retries`` bounds how many times a single step is retried; a negative
    value retries without limit. There is no jitter and no upper cap on the
    computed delay.
    """

    def __init__(self, max_retries: int, base_delay: float = DEFAULT_BASE_DELAY):
        if base_delay < 0:
            raise ValueError(f"base_delay must be non-negative, got {base_delay}")
        self.max_retries = max_retries
        self.base_delay = base_delay

    @property
    def unlimited(self) -> bool:
        return self.max_retries < 0

    def next_delay(self, failures: int) -> Delay:
        if not self.unlimited and failures > self.max_retries:
            return STOP
        return Wait(self.base_delay * (2 ** (failures - 1)))

    def __repr__(self) -> str:
        return (
            f"ExponentialBackoffStrategy(max_retries={self.max_retries}, "
            f"base_delay={self.base_delay})"
        )


class TenacityDelayStrategy(RetryStrategy):
    """Adapt tenacity ``wait_*`` and ``stop_*`` policies.

    Only policies driven by the attempt number behave meaningfully, since the
    adapter has no real tenacity call history to offer. After ``failures``
    consecutive failures tenacity sees ``attempt_number == failures``, so
    ``stop_after_attempt(n)`` allows ``n`` attempts of each step.
    """

    def __init__(self, wait: wait_base, stop: stop_base | None = None):
        self.wait = wait
        self.stop = stop

    def _call_state(self, failures: int) -> RetryCallState:
        state = RetryCallState(retry_object=None, fn=None, args=(), kwargs={})  # type: ignore[arg-type]
        state.attempt_number = failures
        return state

    def next_delay(self, failures: int) -> Delay:
        state = self._call_state(failures)
        if self.stop is not None and self.stop(state):
            return STOP
        return Wait(max(0.0, float(self.wait(state))))


def fixed(delay: float | timedelta) -> FixedDelayStrategy:
    """Create a strategy that always waits ``delay``."""
    return FixedDelayStrategy(delay)


def exponential_backoff(max_retries: int) -> ExponentialBackoffStrategy:
    """Create a 100ms-based exponential backoff strategy.

    If ``max_retries`` is negative, retry without limit.
    """
    return ExponentialBackoffStrategy(max_retries)
