"""Search request state.

:class:`SearchRequest` is the mutable state a builder accumulates before a
query body is assembled: query text, channel, pagination window, sort order
and per-field filter values.

Example:
    >>> from nixsearch.search.request import SearchRequest
    >>> request = SearchRequest()
    >>> request.set_page(10, 20)
    >>> (request.from_, request.size)
    (10, 20)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from nixsearch.core.exceptions import ValidationError
from nixsearch.search.channel import NixChannel

DEFAULT_PAGE_SIZE = 50


class SortOrder(str, Enum):
    """Explicit sort direction. ``None`` in place of a SortOrder means relevance.

    Example:
        >>> from nixsearch.search.request import SortOrder
        >>> SortOrder("asc")
        <SortOrder.ASCENDING: 'asc'>
    """

    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass
class SearchRequest:
    """Builder-internal request specification.

    Attributes:
        query: Free-text query.
        channel: Channel whose index is searched.
        from_: Offset of the first hit (0-based).
        size: Number of hits per page.
        order: Explicit sort order, or None for relevance.
        filters: Wire field name -> accepted values, in insertion order.
    """

    query: str = ""
    channel: NixChannel = NixChannel.UNSTABLE
    from_: int = 0
    size: int = DEFAULT_PAGE_SIZE
    order: SortOrder | None = None
    filters: dict[str, list[str]] = field(default_factory=dict)

    def set_page(self, from_: int, size: int) -> None:
        """Set the pagination window.

        Raises:
            ValidationError: If ``from_ < 0`` or ``size <= 0``.
        """
        if from_ < 0:
            raise ValidationError(f"from must be >= 0, got {from_}", parameter="from")
        if size <= 0:
            raise ValidationError(f"size must be > 0, got {size}", parameter="size")
        self.from_ = from_
        self.size = size

    def add_filter(self, field_name: str, values: tuple[str | None, ...]) -> None:
        """Append filter values for a field; ``None`` entries are ignored."""
        accepted = [v for v in values if v is not None]
        if not accepted:
            return
        self.filters.setdefault(field_name, []).extend(accepted)

    def filter_values(self, field_name: str) -> list[str]:
        """Values accumulated for ``field_name`` (empty if none)."""
        return list(self.filters.get(field_name, ()))
