"""Search result containers.

:class:`SearchResults` is what builders return: a typed page of documents
plus total hit count and facet counts. :class:`SearchPage` is the paginated
envelope returned by the tool layer.

Example:
    >>> from nixsearch.models.results import SearchPage
    >>> page = SearchPage[str].create(["a", "b"], total=5, page=0, size=2)
    >>> page.has_more
    True
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from nixsearch.protocols.search import RawSearchResponse

T = TypeVar("T")


@dataclass(frozen=True)
class AggregationBucket:
    """One facet value and the number of matching documents.

    Example:
        >>> from nixsearch.models.results import AggregationBucket
        >>> AggregationBucket(key="mit", doc_count=12).doc_count
        12
    """

    key: str
    doc_count: int


@dataclass
class SearchResults(Generic[T]):
    """A validated page of search hits.

    Attributes:
        documents: Parsed documents for this page, in backend order.
        total: Total number of matching documents.
        aggregations: Facet name -> buckets (packages only).
        took_ms: Backend-reported query time.
    """

    documents: list[T] = field(default_factory=list)
    total: int = 0
    aggregations: dict[str, list[AggregationBucket]] = field(default_factory=dict)
    took_ms: float = 0.0

    @classmethod
    def from_response(
        cls,
        response: RawSearchResponse,
        parse: Callable[[dict[str, Any]], T],
    ) -> SearchResults[T]:
        """Build results from a valid raw response.

        Args:
            response: Response that already passed validation.
            parse: Converts a hit's ``_source`` to a document.
        """
        documents = [parse(hit.get("_source", {})) for hit in response.hits]
        aggregations = {
            name: [
                AggregationBucket(key=str(bucket["key"]), doc_count=int(bucket["doc_count"]))
                for bucket in agg.get("buckets", [])
            ]
            for name, agg in response.aggregations.items()
        }
        return cls(
            documents=documents,
            total=response.total,
            aggregations=aggregations,
            took_ms=response.took_ms,
        )


class SearchWarning(BaseModel):
    """Non-fatal notice attached to a tool response."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    parameter: str | None = None


class SearchPage(BaseModel, Generic[T]):
    """Paginated envelope returned by the tool layer.

    ``has_more`` is true when another page exists after this one.
    """

    total: int
    page: int
    size: int
    has_more: bool
    results: list[T]
    warnings: list[SearchWarning] | None = None

    @classmethod
    def create(
        cls,
        results: list[T],
        *,
        total: int,
        page: int,
        size: int,
        warnings: list[SearchWarning] | None = None,
    ) -> SearchPage[T]:
        return cls(
            total=total,
            page=page,
            size=size,
            has_more=(page + 1) * size < total,
            results=results,
            warnings=warnings or None,
        )
