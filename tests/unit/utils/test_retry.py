"""Tests for nixsearch.utils.retry."""

from __future__ import annotations

import asyncio

import pytest

from nixsearch.utils.retry import RetryConfig, call_with_retry, with_retry


class TestRetryConfig:
    """Delay and retry decisions."""

    def test_exponential_delays_capped(self) -> None:
        """Delays double from the base delay up to the cap."""
        config = RetryConfig(max_attempts=10, base_delay=1.0, max_delay=30.0)
        delays = [config.calculate_delay(n) for n in range(1, 8)]
        assert delays == [1.0, 2.0, 4.0, 8.0, 16.0, 30.0, 30.0]

    def test_should_retry_respects_max_attempts(self) -> None:
        """No retry once the attempt limit is reached."""
        config = RetryConfig(max_attempts=3)
        assert config.should_retry(OSError(), 2)
        assert not config.should_retry(OSError(), 3)

    def test_should_retry_filters_types(self) -> None:
        """Only retry_on types retry, and no_retry_on wins."""
        config = RetryConfig(retry_on=(OSError,), no_retry_on=(TimeoutError,))
        assert config.should_retry(ConnectionResetError(), 1)
        assert not config.should_retry(TimeoutError(), 1)
        assert not config.should_retry(ValueError(), 1)


class TestCallWithRetry:
    """Blocking retry loop."""

    def test_returns_after_transient_failures(self, no_sleep: list[float]) -> None:
        """Transient failures are retried with 1s, 2s, 4s backoff."""
        attempts: list[int] = []

        def flaky() -> str:
            attempts.append(1)
            if len(attempts) < 4:
                raise ConnectionResetError("reset")
            return "ok"

        result = call_with_retry(flaky, RetryConfig(max_attempts=5, retry_on=(OSError,)))
        assert result == "ok"
        assert len(attempts) == 4
        assert no_sleep == [1.0, 2.0, 4.0]

    def test_reraises_last_error_unchanged(self, no_sleep: list[float]) -> None:
        """Exhausting attempts re-raises the last error, not a wrapper."""
        errors = [OSError("first"), OSError("second"), OSError("third")]

        def failing() -> None:
            raise errors.pop(0)

        with pytest.raises(OSError, match="third"):
            call_with_retry(failing, RetryConfig(max_attempts=3, retry_on=(OSError,)))
        assert no_sleep == [1.0, 2.0]

    def test_non_retryable_raises_immediately(self, no_sleep: list[float]) -> None:
        """Errors outside retry_on are not retried."""
        calls: list[int] = []

        def bad() -> None:
            calls.append(1)
            raise ValueError("bad")

        with pytest.raises(ValueError):
            call_with_retry(bad, RetryConfig(max_attempts=5, retry_on=(OSError,)))
        assert calls == [1]
        assert no_sleep == []

    def test_time_budget_stops_retrying(self, no_sleep: list[float]) -> None:
        """A retry whose delay would exceed the budget is not attempted."""
        calls: list[int] = []

        def failing() -> None:
            calls.append(1)
            raise OSError("down")

        config = RetryConfig(max_attempts=10, base_delay=1.0, max_elapsed=2.5, retry_on=(OSError,))
        with pytest.raises(OSError):
            call_with_retry(failing, config)
        # sleeps are recorded, not taken, so only the delays count against the budget
        assert no_sleep == [1.0, 2.0]
        assert len(calls) == 3

    def test_on_retry_callback(self, no_sleep: list[float]) -> None:
        """on_retry receives the error, attempt and delay."""
        seen: list[tuple[str, int, float]] = []
        outcomes: list[Exception | None] = [OSError("a"), None]

        def once() -> str:
            error = outcomes.pop(0)
            if error:
                raise error
            return "done"

        config = RetryConfig(
            max_attempts=3,
            retry_on=(OSError,),
            on_retry=lambda e, attempt, delay: seen.append((str(e), attempt, delay)),
        )
        assert call_with_retry(once, config) == "done"
        assert seen == [("a", 1, 1.0)]


class TestWithRetry:
    """Async retry loop."""

    async def test_retries_async(self, no_sleep: list[float]) -> None:
        """Async retries use the same backoff."""
        attempts: list[int] = []

        async def flaky() -> int:
            attempts.append(1)
            if len(attempts) < 3:
                raise TimeoutError("slow")
            return 7

        assert await with_retry(flaky, RetryConfig(max_attempts=5, retry_on=(OSError,))) == 7
        assert no_sleep == [1.0, 2.0]

    async def test_cancellation_is_not_retried(self, no_sleep: list[float]) -> None:
        """CancelledError propagates without a retry."""
        calls: list[int] = []

        async def cancelled() -> None:
            calls.append(1)
            raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await with_retry(cancelled, RetryConfig(max_attempts=5, retry_on=(Exception,)))
        assert calls == [1]
        assert no_sleep == []
