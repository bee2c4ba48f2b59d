"""Tests for nixsearch.models.results."""

from __future__ import annotations

import pytest

from nixsearch.models.results import AggregationBucket, SearchPage, SearchResults, SearchWarning
from nixsearch.protocols.search import RawSearchResponse


class TestSearchResults:
    """Typed result pages."""

    def test_from_response(self) -> None:
        """Hits are parsed and buckets converted."""
        response = RawSearchResponse(
            hits=[{"_source": {"n": 1}}, {"_source": {"n": 2}}],
            total=10,
            aggregations={"package_license_set": {"buckets": [{"key": "MIT", "doc_count": 4}]}},
            took_ms=3,
        )
        results = SearchResults.from_response(response, lambda source: source["n"])
        assert results.documents == [1, 2]
        assert results.total == 10
        assert results.aggregations == {"package_license_set": [AggregationBucket(key="MIT", doc_count=4)]}
        assert results.took_ms == 3


class TestSearchPage:
    """Paginated envelope."""

    @pytest.mark.parametrize(
        ("page", "size", "total", "has_more"),
        [(0, 10, 25, True), (1, 10, 25, True), (2, 10, 25, False), (0, 10, 10, False), (0, 50, 0, False)],
    )
    def test_has_more(self, page: int, size: int, total: int, has_more: bool) -> None:
        """has_more is (page + 1) * size < total."""
        assert SearchPage[int].create([], total=total, page=page, size=size).has_more is has_more

    def test_warnings_omitted_when_empty(self) -> None:
        """No warnings means None, not an empty list."""
        assert SearchPage[int].create([], total=0, page=0, size=1, warnings=[]).warnings is None

    def test_dump(self) -> None:
        """The envelope dumps to plain data."""
        page = SearchPage[str].create(
            ["a"],
            total=1,
            page=0,
            size=100,
            warnings=[SearchWarning(code="SIZE_CLAMPED", message="clamped", parameter="size")],
        )
        assert page.model_dump() == {
            "total": 1,
            "page": 0,
            "size": 100,
            "has_more": False,
            "results": ["a"],
            "warnings": [{"code": "SIZE_CLAMPED", "message": "clamped", "parameter": "size"}],
        }
