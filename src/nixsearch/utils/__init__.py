"""nixsearch utilities."""

from nixsearch.utils.retry import RetryConfig, call_with_retry, with_retry

__all__ = [
    "RetryConfig",
    "call_with_retry",
    "with_retry",
]
