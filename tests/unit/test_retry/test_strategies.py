"""Tests for delay strategies."""

from datetime import timedelta

import pytest
from tenacity import stop_after_attempt, wait_exponential, wait_fixed

from step_retry.domain.exceptions import InvalidDelayError
from step_retry.retry import (
    STOP,
    ExponentialBackoffStrategy,
    FixedDelayStrategy,
    Stop,
    TenacityDelayStrategy,
    Wait,
    exponential_backoff,
    fixed,
    normalize_delay,
)


class TestFixedDelay:
    """Test fixed delay strategy."""

    def test_always_returns_same_delay(self):
        """Test that the failure count does not matter."""
        strategy = fixed(0.5)
        assert [strategy(n) for n in (1, 2, 10, 1000)] == [Wait(0.5)] * 4

    def test_accepts_timedelta(self):
        """Test constructing from a timedelta."""
        assert fixed(timedelta(milliseconds=250))(1) == Wait(0.25)

    def test_rejects_negative_delay(self):
        """Test that negative delays are refused."""
        with pytest.raises(ValueError, match="non-negative"):
            FixedDelayStrategy(-0.1)


class TestExponentialBackoff:
    """Test exponential backoff strategy."""

    def test_bounded_delays(self):
        """Test the doubling sequence up to max_retries."""
        strategy = exponential_backoff(3)

        assert strategy(1).seconds == pytest.approx(0.1)
        assert strategy(2).seconds == pytest.approx(0.2)
        assert strategy(3).seconds == pytest.approx(0.4)
        assert strategy(4) == STOP
        assert strategy(5) == STOP

    def test_zero_retries_stops_immediately(self):
        """Test that max_retries=0 never retries."""
        assert exponential_backoff(0)(1) == STOP

    def test_unlimited_retries(self):
        """Test that a negative max_retries never stops."""
        strategy = exponential_backoff(-1)

        assert strategy.unlimited
        assert strategy(20).seconds == pytest.approx(0.1 * 2**19)

    def test_custom_base_delay(self):
        """Test the base delay parameter."""
        strategy = ExponentialBackoffStrategy(max_retries=2, base_delay=1.0)
        assert strategy(1) == Wait(1.0)
        assert strategy(2) == Wait(2.0)
        assert strategy(3) == STOP

    def test_no_jitter(self):
        """Test that results are deterministic."""
        strategy = exponential_backoff(-1)
        assert {strategy(4) for _ in range(20)} == {strategy(4)}


class TestTenacityAdapter:
    """Test adapting tenacity policies."""

    def test_matches_builtin_exponential_backoff(self):
        """Test tenacity wait/stop equivalent to exponential_backoff(3)."""
        adapted = TenacityDelayStrategy(
            wait_exponential(multiplier=0.1), stop_after_attempt(4)
        )
        builtin = exponential_backoff(3)

        for failures in range(1, 6):
            expected = builtin(failures)
            actual = adapted(failures)
            if isinstance(expected, Stop):
                assert actual == STOP
            else:
                assert actual.seconds == pytest.approx(expected.seconds)

    def test_without_stop_retries_forever(self):
        """Test that omitting stop never exhausts."""
        adapted = TenacityDelayStrategy(wait_fixed(0.3))
        assert adapted(1).seconds == pytest.approx(0.3)
        assert adapted(500).seconds == pytest.approx(0.3)


class TestNormalizeDelay:
    """Test coercion of strategy results."""

    def test_passthrough(self):
        """Test Wait and Stop are returned unchanged."""
        assert normalize_delay(Wait(1.0), 1) == Wait(1.0)
        assert normalize_delay(STOP, 1) is STOP

    def test_numbers_and_timedeltas(self):
        """Test plain values are converted to Wait."""
        assert normalize_delay(2, 1) == Wait(2.0)
        assert normalize_delay(0.5, 1) == Wait(0.5)
        assert normalize_delay(timedelta(seconds=3), 1) == Wait(3.0)

    def test_none_means_stop(self):
        """Test that None stops retrying."""
        assert normalize_delay(None, 1) == STOP

    @pytest.mark.parametrize("value", [-1, -0.5, timedelta(seconds=-1), "1s", True])
    def test_invalid_values(self, value):
        """Test values that are not valid delays."""
        with pytest.raises(InvalidDelayError) as exc_info:
            normalize_delay(value, 7)
        assert exc_info.value.failures == 7

    def test_wait_rejects_negative(self):
        """Test that Wait itself cannot be negative."""
        with pytest.raises(ValueError):
            Wait(-1)
