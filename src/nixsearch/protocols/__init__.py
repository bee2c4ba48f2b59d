"""Protocol definitions for pluggable backends."""

from nixsearch.protocols.search import DocumentSearchService, RawSearchResponse, ServerError

__all__ = [
    "DocumentSearchService",
    "RawSearchResponse",
    "ServerError",
]
