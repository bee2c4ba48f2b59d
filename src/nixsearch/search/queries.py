"""Query body assembly for each document kind.

A query strategy is a small set of pure functions: which fields take part in
full-text matching and with what weight, how results sort, and how the whole
request body is put together. Strategies hold no request state, so the same
request always produces the same body.

Both kinds share one query shape, borrowed from the search.nixos.org
frontend: a ``bool`` query whose filter restricts the document type (plus any
facet filters) and whose ``must`` is a ``dis_max`` of a cross-fields
``multi_match`` and a case-insensitive ``*query*`` wildcard on the name field.

Example:
    >>> from nixsearch.search.queries import OptionQuery
    >>> OptionQuery().match_fields()[:2]
    ['option_name^6', 'option_name.*^3.6']
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from nixsearch.models.fields import TYPE_FIELD, FlakeField, OptionField, PackageField
from nixsearch.models.option import NixOption
from nixsearch.models.package import NixPackage
from nixsearch.search.request import SearchRequest, SortOrder

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

DIS_MAX_TIE_BREAKER = 0.7
DEFAULT_AGGREGATION_SIZE = 20


@dataclass(frozen=True)
class WeightedField:
    """A match field and its relevance weight.

    Each entry expands to the field itself and its ``.*`` sub-fields
    (tokenized variants) at a lower weight.

    Example:
        >>> from nixsearch.search.queries import WeightedField
        >>> WeightedField("package_pname", 6, 3.6).expand()
        ['package_pname^6', 'package_pname.*^3.6']
    """

    name: str
    weight: float
    subfield_weight: float

    def expand(self) -> list[str]:
        return [f"{self.name}^{self.weight:g}", f"{self.name}.*^{self.subfield_weight:g}"]


# Weights are taken from the official search.nixos.org frontend
PACKAGE_MATCH_FIELDS: tuple[WeightedField, ...] = (
    WeightedField(PackageField.ATTR_NAME.value, 9, 5.4),
    WeightedField(PackageField.PROGRAMS.value, 9, 5.4),
    WeightedField(PackageField.PNAME.value, 6, 3.6),
    WeightedField(PackageField.DESCRIPTION.value, 1.3, 0.78),
    WeightedField(PackageField.LONG_DESCRIPTION.value, 1, 0.6),
    WeightedField(FlakeField.NAME.value, 0.5, 0.3),
)

OPTION_MATCH_FIELDS: tuple[WeightedField, ...] = (
    WeightedField(OptionField.NAME.value, 6, 3.6),
    WeightedField(OptionField.DESCRIPTION.value, 1, 0.6),
    WeightedField(FlakeField.NAME.value, 0.5, 0.3),
)

# Facet dimensions a package search can filter on and aggregate over
PACKAGE_FILTER_FIELDS: tuple[str, ...] = (
    PackageField.ATTR_SET.value,
    PackageField.LICENSE_SET.value,
    PackageField.MAINTAINERS_SET.value,
    PackageField.TEAMS_SET.value,
    PackageField.PLATFORMS.value,
)


class QueryStrategy(Protocol[T_co]):
    """Document-kind specific parts of a search."""

    def match_fields(self) -> list[str]:
        """Weighted fields for the full-text match."""
        ...

    def sort(self, order: SortOrder | None) -> list[dict[str, Any]]:
        """Sort clauses; ``None`` means relevance first."""
        ...

    def build_body(self, request: SearchRequest) -> dict[str, Any]:
        """Full ``_search`` request body."""
        ...

    def parse_document(self, source: dict[str, Any]) -> T_co:
        """Convert a hit's ``_source`` into a typed document."""
        ...


def type_filter(type_value: str, name: str) -> dict[str, Any]:
    """Restrict hits to one document type."""
    return {"term": {TYPE_FIELD: {"value": type_value, "_name": name}}}


def text_query(query: str, fields: Sequence[str], wildcard_field: str) -> dict[str, Any]:
    """Scored ``dis_max`` of the weighted multi-match and the name wildcard.

    An empty query contributes no ``multi_match`` clause; the wildcard
    ``**`` then matches every document that has the name field.
    """
    queries: list[dict[str, Any]] = []
    # a blank cross_fields multi_match matches nothing, so it is left out
    if query:
        queries.append(
            {
                "multi_match": {
                    "_name": f"multi_match_{query}",
                    "type": "cross_fields",
                    "query": query,
                    "analyzer": "whitespace",
                    "auto_generate_synonyms_phrase_query": False,
                    "operator": "and",
                    "fields": list(fields),
                }
            }
        )
    queries.append(
        {
            "wildcard": {
                wildcard_field: {
                    "value": f"*{query}*",
                    "case_insensitive": True,
                }
            }
        }
    )
    return {"dis_max": {"tie_breaker": DIS_MAX_TIE_BREAKER, "queries": queries}}


def field_sort(field_name: str, order: SortOrder | str) -> dict[str, Any]:
    value = order.value if isinstance(order, SortOrder) else order
    return {field_name: {"order": value}}


def _paging(request: SearchRequest) -> dict[str, Any]:
    return {"from": request.from_, "size": request.size}


class _DocumentQuery(Generic[T]):
    """Shared body assembly; subclasses provide the per-kind tables."""

    type_value: str
    filter_name: str
    wildcard_field: str
    weighted_fields: tuple[WeightedField, ...]

    def match_fields(self) -> list[str]:
        fields: list[str] = []
        for weighted in self.weighted_fields:
            fields.extend(weighted.expand())
        return fields

    def filters(self, request: SearchRequest) -> list[dict[str, Any]]:
        return [type_filter(self.type_value, self.filter_name)]

    def build_body(self, request: SearchRequest) -> dict[str, Any]:
        body: dict[str, Any] = {
            "query": {
                "bool": {
                    "filter": self.filters(request),
                    "must": [text_query(request.query, self.match_fields(), self.wildcard_field)],
                }
            },
            **_paging(request),
            "sort": self.sort(request.order),
        }
        return body

    def sort(self, order: SortOrder | None) -> list[dict[str, Any]]:
        raise NotImplementedError


class PackageQuery(_DocumentQuery[NixPackage]):
    """Query strategy for package documents.

    Example:
        >>> from nixsearch.search.queries import PackageQuery
        >>> [next(iter(s)) for s in PackageQuery().sort(None)]
        ['_score', 'package_attr_name', 'package_pversion']
    """

    type_value = "package"
    filter_name = "filter_packages"
    wildcard_field = PackageField.ATTR_NAME.value
    weighted_fields = PACKAGE_MATCH_FIELDS

    def __init__(self, aggregation_size: int = DEFAULT_AGGREGATION_SIZE) -> None:
        self.aggregation_size = aggregation_size

    def sort(self, order: SortOrder | None) -> list[dict[str, Any]]:
        attr_name = PackageField.ATTR_NAME.value
        version = PackageField.VERSION.value
        if order is None:
            return [
                field_sort("_score", SortOrder.DESCENDING),
                field_sort(attr_name, SortOrder.DESCENDING),
                field_sort(version, SortOrder.DESCENDING),
            ]
        return [field_sort(attr_name, order), field_sort(version, order)]

    def filters(self, request: SearchRequest) -> list[dict[str, Any]]:
        # AND across dimensions, OR within one dimension
        buckets = [
            {"bool": {"should": [_bucket_term(name, value) for value in values]}}
            for name in PACKAGE_FILTER_FIELDS
            if (values := request.filter_values(name))
        ]
        clauses = super().filters(request)
        if buckets:
            clauses.append({"bool": {"must": buckets}})
        return clauses

    def aggregations(self) -> dict[str, Any]:
        return {
            name: {"terms": {"field": name, "size": self.aggregation_size}}
            for name in PACKAGE_FILTER_FIELDS
        }

    def build_body(self, request: SearchRequest) -> dict[str, Any]:
        body = super().build_body(request)
        body["aggregations"] = self.aggregations()
        return body

    def parse_document(self, source: dict[str, Any]) -> NixPackage:
        return NixPackage.model_validate(source)


class OptionQuery(_DocumentQuery[NixOption]):
    """Query strategy for NixOS option documents."""

    type_value = "option"
    filter_name = "filter_options"
    wildcard_field = OptionField.NAME.value
    weighted_fields = OPTION_MATCH_FIELDS

    def sort(self, order: SortOrder | None) -> list[dict[str, Any]]:
        name = OptionField.NAME.value
        if order is None:
            return [
                field_sort("_score", SortOrder.DESCENDING),
                field_sort(name, SortOrder.DESCENDING),
            ]
        return [field_sort(name, order)]

    def parse_document(self, source: dict[str, Any]) -> NixOption:
        return NixOption.model_validate(source)


def _bucket_term(field_name: str, value: str) -> dict[str, Any]:
    return {"term": {field_name: {"value": value, "_name": f"filter_bucket_{field_name}"}}}
