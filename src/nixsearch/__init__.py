"""
nixsearch - Client library for the search.nixos.org backend.

Search nixpkgs packages and NixOS options with fluent, validated query
builders over the Elasticsearch indices behind search.nixos.org.

Key Features:
- Channel keywords (unstable, stable, beta, flakes) resolved against the
  channels the backend actually serves
- Package search with platform, package set, license, maintainer and team
  filters plus facet counts
- Blocking and async execution with the same retry and validation
- Typed pydantic documents

Quick Start:
    >>> from nixsearch import create_client
    >>> client = create_client()
    >>> results = (
    ...     client.packages()
    ...     .with_query("ripgrep")
    ...     .for_channel(client.resolve_channel("stable"))
    ...     .with_platform("x86_64-linux")
    ...     .execute()
    ... )  # doctest: +SKIP

Architecture:
    Facade: NixSearchClient
    Builders: PackageSearchBuilder, OptionSearchBuilder
    Execution: SearchExecutor (retry + validation)
    Backends: ElasticsearchService
"""

# Core
from nixsearch.core.config import Settings, get_settings
from nixsearch.core.exceptions import (
    ChannelResolutionError,
    NixSearchError,
    SearchRequestError,
    ValidationError,
)

# Models
from nixsearch.models.option import NixOption
from nixsearch.models.package import NixPackage
from nixsearch.models.results import SearchPage, SearchResults, SearchWarning

# Search
from nixsearch.search.builders import OptionSearchBuilder, PackageSearchBuilder
from nixsearch.search.channel import NixChannel
from nixsearch.search.client import NixSearchClient, create_client
from nixsearch.search.elasticsearch import ElasticsearchService
from nixsearch.search.request import SortOrder

__version__ = "0.1.0"

__all__ = [
    # Core
    "Settings",
    "get_settings",
    "NixSearchError",
    "ValidationError",
    "ChannelResolutionError",
    "SearchRequestError",
    # Models
    "NixPackage",
    "NixOption",
    "SearchResults",
    "SearchPage",
    "SearchWarning",
    # Search
    "NixChannel",
    "NixSearchClient",
    "create_client",
    "PackageSearchBuilder",
    "OptionSearchBuilder",
    "SortOrder",
    "ElasticsearchService",
    "__version__",
]
