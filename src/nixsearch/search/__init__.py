"""Channel resolution, query builders and the search facade."""

from nixsearch.search.builders import OptionSearchBuilder, PackageSearchBuilder, SearchBuilder
from nixsearch.search.channel import NixChannel
from nixsearch.search.client import NixSearchClient, create_client
from nixsearch.search.elasticsearch import ElasticsearchService
from nixsearch.search.executor import (
    TRANSIENT_ERRORS,
    LoggingObserver,
    SearchExecutor,
    SearchObserver,
    SearchQuery,
)
from nixsearch.search.queries import OptionQuery, PackageQuery, QueryStrategy
from nixsearch.search.request import SearchRequest, SortOrder

__all__ = [
    # Channels
    "NixChannel",
    # Builders
    "SearchBuilder",
    "PackageSearchBuilder",
    "OptionSearchBuilder",
    "SearchRequest",
    "SortOrder",
    # Query strategies
    "QueryStrategy",
    "PackageQuery",
    "OptionQuery",
    # Execution
    "SearchExecutor",
    "SearchQuery",
    "SearchObserver",
    "LoggingObserver",
    "TRANSIENT_ERRORS",
    # Backends
    "ElasticsearchService",
    # Facade
    "NixSearchClient",
    "create_client",
]
