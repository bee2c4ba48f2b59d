"""Retry utilities for nixsearch.

Provides retry logic with exponential backoff for transient failures when
talking to the search backend. The blocking and async entry points share
the same decision path, so both retry exactly the same errors with the same
delays.

Example:
    >>> from nixsearch.utils.retry import RetryConfig
    >>> config = RetryConfig(max_attempts=4, base_delay=1.0, max_delay=30.0)
    >>> [config.calculate_delay(n) for n in (1, 2, 3)]
    [1.0, 2.0, 4.0]
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

logger = logging.getLogger("nixsearch.retry")

T = TypeVar("T")


@dataclass
class RetryConfig:
    """Configuration for retry behavior.

    Attributes:
        max_attempts: Maximum total attempts (including first try)
        base_delay: Delay in seconds before the first retry
        max_delay: Maximum delay between retries
        exponential_base: Multiplier for exponential backoff (default: 2)
        jitter: Random jitter factor (0-1), off by default
        max_elapsed: Total time budget in seconds for the whole sequence
        retry_on: Exception types that should trigger retry
        no_retry_on: Exception types that should NOT retry
        on_retry: Callback called on each retry (exception, attempt, delay)
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    exponential_base: float = 2.0
    jitter: float = 0.0
    max_elapsed: float | None = None
    retry_on: tuple[type[BaseException], ...] = (Exception,)
    no_retry_on: tuple[type[BaseException], ...] = ()
    on_retry: Callable[[BaseException, int, float], None] | None = None

    def calculate_delay(self, attempt: int) -> float:
        """Calculate delay after a failed attempt.

        Args:
            attempt: Attempt that just failed (1-indexed)

        Returns:
            Delay in seconds
        """
        delay = self.base_delay * (self.exponential_base ** (attempt - 1))
        delay = min(delay, self.max_delay)

        if self.jitter > 0:
            jitter_amount = delay * self.jitter
            delay += random.uniform(-jitter_amount, jitter_amount)

        return max(0.0, delay)

    def should_retry(self, exc: BaseException, attempt: int) -> bool:
        """Determine if we should retry after an exception.

        Args:
            exc: The exception that occurred
            attempt: Current attempt number

        Returns:
            True if we should retry
        """
        if attempt >= self.max_attempts:
            return False

        # no_retry_on takes precedence
        if self.no_retry_on and isinstance(exc, self.no_retry_on):
            return False

        return isinstance(exc, self.retry_on)


def _next_delay(config: RetryConfig, exc: BaseException, attempt: int, started: float) -> float | None:
    """Return the backoff before the next attempt, or None to give up."""
    if not config.should_retry(exc, attempt):
        logger.debug(f"Not retrying {type(exc).__name__} on attempt {attempt}")
        return None

    delay = config.calculate_delay(attempt)

    if config.max_elapsed is not None:
        elapsed = time.monotonic() - started
        if elapsed + delay > config.max_elapsed:
            logger.warning(
                f"Retry budget of {config.max_elapsed:.1f}s exhausted after "
                f"{attempt} attempt(s): {exc}"
            )
            return None

    logger.warning(
        f"Attempt {attempt}/{config.max_attempts} failed: {exc}. "
        f"Retrying in {delay:.1f}s..."
    )

    if config.on_retry:
        config.on_retry(exc, attempt, delay)

    return delay


async def with_retry(
    func: Callable[[], Awaitable[T]],
    config: RetryConfig | None = None,
) -> T:
    """Execute an async function with retry logic.

    Cancellation (``asyncio.CancelledError``) is never retried, and the
    backoff sleep itself is cancellable.

    Args:
        func: Async function to execute
        config: Retry configuration (default: 3 attempts)

    Returns:
        The result of the function

    Raises:
        Exception: The last error, unchanged, once retries are exhausted
    """
    config = config or RetryConfig()
    started = time.monotonic()
    attempt = 0

    while True:
        attempt += 1
        try:
            return await func()
        except Exception as e:
            delay = _next_delay(config, e, attempt, started)
            if delay is None:
                raise

        await asyncio.sleep(delay)


def call_with_retry(
    func: Callable[[], T],
    config: RetryConfig | None = None,
) -> T:
    """Blocking counterpart of :func:`with_retry`.

    Example:
        >>> from nixsearch.utils.retry import call_with_retry, RetryConfig
        >>> call_with_retry(lambda: 42, RetryConfig(max_attempts=1))
        42
    """
    config = config or RetryConfig()
    started = time.monotonic()
    attempt = 0

    while True:
        attempt += 1
        try:
            return func()
        except Exception as e:
            delay = _next_delay(config, e, attempt, started)
            if delay is None:
                raise

        time.sleep(delay)


__all__ = [
    "RetryConfig",
    "call_with_retry",
    "with_retry",
]
