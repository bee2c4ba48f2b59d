"""Fluent search builders.

A builder composes three parts: a :class:`SearchRequest` holding the caller's
configuration, a query strategy that turns the request into a body, and a
:class:`SearchExecutor` that runs it. Configuration methods mutate the
builder and return it for chaining; they never do I/O. A builder instance
must not be configured from several call sites concurrently.

Example:
    >>> from unittest.mock import Mock
    >>> from nixsearch.core.config import Settings
    >>> from nixsearch.search.builders import PackageSearchBuilder
    >>> from nixsearch.search.executor import SearchExecutor
    >>> builder = PackageSearchBuilder(SearchExecutor(Mock(), Settings()))
    >>> query = builder.with_query("ripgrep").with_platform("x86_64-linux").page(0, 10).build()
    >>> query.index
    'latest-44-nixos-unstable'
    >>> query.body["size"]
    10
"""

from __future__ import annotations

from typing import Generic, Self, TypeVar

from nixsearch.models.fields import PackageField
from nixsearch.models.option import NixOption
from nixsearch.models.package import NixPackage
from nixsearch.models.results import SearchResults
from nixsearch.search.channel import NixChannel
from nixsearch.search.executor import SearchExecutor, SearchQuery
from nixsearch.search.queries import OptionQuery, PackageQuery, QueryStrategy
from nixsearch.search.request import SearchRequest, SortOrder

T = TypeVar("T")


class SearchBuilder(Generic[T]):
    """Generic fluent builder over one document kind.

    Args:
        executor: Runs the assembled query.
        strategy: Builds the body and parses hits for this document kind.
    """

    def __init__(self, executor: SearchExecutor, strategy: QueryStrategy[T]) -> None:
        self._executor = executor
        self._strategy = strategy
        self._request = SearchRequest()

    @property
    def request(self) -> SearchRequest:
        """The request state accumulated so far."""
        return self._request

    def for_channel(self, channel: NixChannel) -> Self:
        """Search the given channel's index."""
        self._request.channel = channel
        return self

    def with_query(self, query: str | None) -> Self:
        """Set the free-text query. ``None`` keeps the current query."""
        if query is not None:
            self._request.query = query
        return self

    def page(self, from_: int, size: int) -> Self:
        """Set the pagination window.

        Raises:
            ValidationError: If ``from_ < 0`` or ``size <= 0``.
        """
        self._request.set_page(from_, size)
        return self

    def sort_by(self, order: SortOrder | None) -> Self:
        """Sort by name in the given order, or by relevance when ``None``."""
        self._request.order = order
        return self

    def build(self) -> SearchQuery:
        """Assemble the index name and request body."""
        return SearchQuery(
            index=self._executor.index_name(self._request.channel),
            body=self._strategy.build_body(self._request),
        )

    def execute(self) -> SearchResults[T]:
        """Run the search, blocking.

        Raises:
            SearchRequestError: If the backend rejects the query.
        """
        response = self._executor.execute(self.build())
        return SearchResults.from_response(response, self._strategy.parse_document)

    async def execute_async(self) -> SearchResults[T]:
        """Run the search without blocking.

        Raises:
            SearchRequestError: If the backend rejects the query.
        """
        response = await self._executor.execute_async(self.build())
        return SearchResults.from_response(response, self._strategy.parse_document)


class PackageSearchBuilder(SearchBuilder[NixPackage]):
    """Package search with facet filters.

    Each ``with_*`` call appends to its filter; values within one filter are
    alternatives, different filters must all match.
    """

    def __init__(self, executor: SearchExecutor) -> None:
        super().__init__(executor, PackageQuery(executor.settings.aggregation_size))

    def with_package_set(self, *sets: str | None) -> Self:
        """Filter by package set, e.g. ``python3Packages``."""
        self._request.add_filter(PackageField.ATTR_SET.value, sets)
        return self

    def with_license(self, *licenses: str | None) -> Self:
        self._request.add_filter(PackageField.LICENSE_SET.value, licenses)
        return self

    def with_maintainer(self, *maintainers: str | None) -> Self:
        self._request.add_filter(PackageField.MAINTAINERS_SET.value, maintainers)
        return self

    def with_team(self, *teams: str | None) -> Self:
        self._request.add_filter(PackageField.TEAMS_SET.value, teams)
        return self

    def with_platform(self, *platforms: str | None) -> Self:
        """Filter by platform, e.g. ``x86_64-linux``."""
        self._request.add_filter(PackageField.PLATFORMS.value, platforms)
        return self


class OptionSearchBuilder(SearchBuilder[NixOption]):
    """NixOS option search."""

    def __init__(self, executor: SearchExecutor) -> None:
        super().__init__(executor, OptionQuery())
