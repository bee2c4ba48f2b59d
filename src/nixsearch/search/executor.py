"""Search execution with retry and response validation.

The executor is the only part of a search that does I/O. It turns a
channel into an index name, sends the query body to the document search
service, retries transient transport failures with exponential backoff and
converts a failed backend response into :class:`SearchRequestError`.

Blocking and async execution go through the same retry policy and the same
validation; they differ only in how they wait.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

import orjson
from elasticsearch import ConnectionError as ESConnectionError
from elasticsearch import ConnectionTimeout as ESConnectionTimeout

from nixsearch.core.config import Settings
from nixsearch.core.exceptions import SearchRequestError
from nixsearch.protocols.search import DocumentSearchService, RawSearchResponse
from nixsearch.search.channel import NixChannel
from nixsearch.utils.retry import RetryConfig, call_with_retry, with_retry

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Search request failed: "
UNKNOWN_ERROR = "Unknown error"

# Builtin ConnectionError and TimeoutError are OSError subclasses.
# asyncio.CancelledError is a BaseException and is never caught here.
TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (
    ESConnectionError,
    ESConnectionTimeout,
    OSError,
)


@dataclass(frozen=True)
class SearchQuery:
    """A fully assembled search: target index and request body."""

    index: str
    body: dict[str, Any]


class SearchObserver(Protocol):
    """Hook called around every search dispatch."""

    def before_search(self, index: str, body: dict[str, Any]) -> None: ...

    def after_search(self, index: str, response: RawSearchResponse) -> None: ...


class LoggingObserver:
    """Logs query bodies and response summaries at DEBUG level."""

    def __init__(self, logger_: logging.Logger | None = None) -> None:
        self._logger = logger_ or logging.getLogger("nixsearch.debug")

    def before_search(self, index: str, body: dict[str, Any]) -> None:
        self._logger.debug(f"POST /{index}/_search {orjson.dumps(body).decode()}")

    def after_search(self, index: str, response: RawSearchResponse) -> None:
        if response.is_valid:
            self._logger.debug(
                f"{index}: {response.total} hits, {len(response.hits)} returned in {response.took_ms:g}ms"
            )
        else:
            self._logger.debug(f"{index}: invalid response ({describe_failure(response)})")


def describe_failure(response: RawSearchResponse) -> str:
    """Best available reason for a failed response."""
    if response.original_exception is not None:
        return str(response.original_exception)
    if response.server_error is not None and response.server_error.reason:
        return response.server_error.reason
    return UNKNOWN_ERROR


def validate_response(response: RawSearchResponse) -> RawSearchResponse:
    """Return ``response`` if valid, else raise :class:`SearchRequestError`.

    Example:
        >>> from nixsearch.protocols.search import RawSearchResponse
        >>> validate_response(RawSearchResponse.failed())  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        SearchRequestError: Search request failed: Unknown error
    """
    if response.is_valid:
        return response
    error = SearchRequestError(ERROR_PREFIX + describe_failure(response), response.original_exception)
    raise error from response.original_exception


class SearchExecutor:
    """Dispatches assembled queries to a document search service.

    Args:
        service: Backend to query.
        settings: Schema version, timeouts and retry limits.
        observers: Hooks called before and after each dispatch. A
            :class:`LoggingObserver` is added when debug mode is enabled.
    """

    def __init__(
        self,
        service: DocumentSearchService,
        settings: Settings,
        observers: Sequence[SearchObserver] = (),
    ) -> None:
        self.service = service
        self.settings = settings
        self.observers: list[SearchObserver] = list(observers)
        if settings.enable_debug_mode and not any(isinstance(o, LoggingObserver) for o in self.observers):
            self.observers.append(LoggingObserver())

    def index_name(self, channel: NixChannel) -> str:
        """Backend index for a channel, e.g. ``latest-44-nixos-unstable``."""
        return f"latest-{self.settings.mapping_schema_version}-{channel}"

    @property
    def alias_prefix(self) -> str:
        return f"latest-{self.settings.mapping_schema_version}-"

    def retry_config(self) -> RetryConfig:
        """Backoff of 1s, 2s, 4s, ... capped at 30s, within the retry budget."""
        return RetryConfig(
            max_attempts=self.settings.max_retries + 1,
            base_delay=1.0,
            max_delay=30.0,
            exponential_base=2.0,
            jitter=0.0,
            max_elapsed=self.settings.max_retry_timeout,
            retry_on=TRANSIENT_ERRORS,
        )

    def execute(self, query: SearchQuery) -> RawSearchResponse:
        """Run a query, blocking. Returns a validated response."""
        self._before(query)
        response = call_with_retry(
            lambda: self.service.search(query.index, query.body, timeout=self.settings.timeout),
            self.retry_config(),
        )
        self._after(query, response)
        return validate_response(response)

    async def execute_async(self, query: SearchQuery) -> RawSearchResponse:
        """Run a query without blocking. Returns a validated response."""
        self._before(query)
        response = await with_retry(
            lambda: self.service.search_async(query.index, query.body, timeout=self.settings.timeout),
            self.retry_config(),
        )
        self._after(query, response)
        return validate_response(response)

    def list_aliases(self) -> list[str]:
        pattern = f"{self.alias_prefix}*"
        return call_with_retry(lambda: self.service.list_aliases(pattern), self.retry_config())

    async def list_aliases_async(self) -> list[str]:
        pattern = f"{self.alias_prefix}*"
        return await with_retry(lambda: self.service.list_aliases_async(pattern), self.retry_config())

    def _before(self, query: SearchQuery) -> None:
        for observer in self.observers:
            observer.before_search(query.index, query.body)

    def _after(self, query: SearchQuery, response: RawSearchResponse) -> None:
        for observer in self.observers:
            observer.after_search(query.index, response)
