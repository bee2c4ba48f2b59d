"""Document search service protocol.

Defines the contract between the query builders and the search backend,
and the raw response shape the backend hands back.

A service raises transient transport failures (connection errors,
timeouts) so the caller can retry them. Failures the backend reports for a
request it did receive come back as an invalid :class:`RawSearchResponse`.

Example:
    >>> from nixsearch.protocols.search import RawSearchResponse, ServerError
    >>> resp = RawSearchResponse.failed(server_error=ServerError(reason="no such index"))
    >>> resp.is_valid
    False
    >>> resp.server_error.reason
    'no such index'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class ServerError:
    """Structured error reported by the backend.

    Example:
        >>> from nixsearch.protocols.search import ServerError
        >>> ServerError(status=404, type="index_not_found_exception").status
        404
    """

    status: int | None = None
    type: str | None = None
    reason: str | None = None


@dataclass
class RawSearchResponse:
    """Backend response before validation.

    Attributes:
        is_valid: Whether the backend executed the query.
        hits: Raw hit objects (each with ``_source``).
        total: Total number of matching documents.
        aggregations: Raw aggregation results keyed by name.
        took_ms: Backend-reported query time.
        original_exception: Native exception for a failed request.
        server_error: Structured backend error for a failed request.
    """

    is_valid: bool = True
    hits: list[dict[str, Any]] = field(default_factory=list)
    total: int = 0
    aggregations: dict[str, Any] = field(default_factory=dict)
    took_ms: float = 0.0
    original_exception: BaseException | None = None
    server_error: ServerError | None = None

    @classmethod
    def from_body(cls, body: dict[str, Any]) -> RawSearchResponse:
        """Parse an Elasticsearch ``_search`` response body.

        Example:
            >>> from nixsearch.protocols.search import RawSearchResponse
            >>> RawSearchResponse.from_body({"took": 3, "hits": {"total": {"value": 7}, "hits": []}}).total
            7
        """
        hits = body.get("hits", {})
        total = hits.get("total", 0)
        # ES 7+ reports {"value": n, "relation": "eq"}; older versions a bare int
        if isinstance(total, dict):
            total = total.get("value", 0)
        return cls(
            is_valid=True,
            hits=list(hits.get("hits", [])),
            total=int(total),
            aggregations=dict(body.get("aggregations", {})),
            took_ms=float(body.get("took", 0)),
        )

    @classmethod
    def failed(
        cls,
        *,
        original_exception: BaseException | None = None,
        server_error: ServerError | None = None,
    ) -> RawSearchResponse:
        """Build an invalid response."""
        return cls(
            is_valid=False,
            original_exception=original_exception,
            server_error=server_error,
        )


@runtime_checkable
class DocumentSearchService(Protocol):
    """Search backend protocol."""

    def search(self, index: str, body: dict[str, Any], *, timeout: float | None = None) -> RawSearchResponse:
        """Run a query body against an index."""
        ...

    async def search_async(
        self, index: str, body: dict[str, Any], *, timeout: float | None = None
    ) -> RawSearchResponse:
        """Run a query body against an index without blocking."""
        ...

    def list_aliases(self, pattern: str) -> list[str]:
        """Index alias names matching a wildcard pattern."""
        ...

    async def list_aliases_async(self, pattern: str) -> list[str]:
        """Index alias names matching a wildcard pattern, without blocking."""
        ...

    def close(self) -> None:
        """Release blocking resources."""
        ...

    async def aclose(self) -> None:
        """Release async resources."""
        ...
