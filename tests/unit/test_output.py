"""Tests for nixsearch.output."""

from __future__ import annotations

import io
import json
from typing import Any

from rich.console import Console

from nixsearch.models.option import NixOption
from nixsearch.models.package import NixPackage
from nixsearch.models.results import AggregationBucket, SearchResults
from nixsearch.output import OutputFormat, channels_table, format_json, format_results, format_text
from nixsearch.search.channel import NixChannel


def package(package_doc: Any, **extra: Any) -> NixPackage:
    return NixPackage.model_validate(package_doc(**extra))


class TestFormatText:
    """Human-readable output."""

    def test_summary_fields(self, package_doc: Any) -> None:
        """Brief output shows name, version and description."""
        results = SearchResults(documents=[package(package_doc, package_platforms=["x86_64-linux"])], total=7)
        text = format_text(results)
        assert text.startswith("Found 7 results\n")
        assert "Package: ripgrep" in text
        assert "  Version: 14.1.0" in text
        assert "  Description: ripgrep description" in text
        assert "Platforms" not in text

    def test_detailed_fields(self, package_doc: Any) -> None:
        """Detailed output adds the remaining populated fields."""
        doc = package(
            package_doc,
            package_platforms=["x86_64-linux", "aarch64-linux"],
            package_mainProgram="rg",
            package_license=[{"fullName": "MIT License"}, {"fullName": "The Unlicense"}],
            package_maintainers=[{"name": "Alice"}, {"email": "bob@example.org"}],
        )
        text = format_text(SearchResults(documents=[doc], total=1), detailed=True)
        assert "  Platforms: x86_64-linux, aarch64-linux" in text
        assert "  Main Program: rg" in text
        assert "  License: MIT License, The Unlicense" in text
        assert "  Maintainers: Alice, bob@example.org" in text
        assert "  System: x86_64-linux" in text
        assert "Long Description" not in text

    def test_option_detailed(self, option_doc: Any) -> None:
        """Option output includes type and default when detailed."""
        option = NixOption.model_validate(option_doc(option_flake=["nixvim", "plugins"]))
        text = format_text(SearchResults(documents=[option], total=1), detailed=True)
        assert "Option: services.nginx.enable" in text
        assert "  Type: boolean" in text
        assert "  Default: false" in text
        assert "  Flake: nixvim, plugins" in text


class TestFormatJson:
    """JSON output."""

    def test_documents_and_total(self, package_doc: Any) -> None:
        """JSON has total and snake_case results without nulls."""
        payload = json.loads(format_json(SearchResults(documents=[package(package_doc)], total=3)))
        assert payload["total"] == 3
        assert payload["results"][0]["attr_name"] == "ripgrep"
        assert "main_program" not in payload["results"][0]
        assert "aggregations" not in payload

    def test_detailed_includes_facets(self) -> None:
        """Detailed JSON includes facet counts."""
        results = SearchResults(
            total=0,
            aggregations={"package_license_set": [AggregationBucket(key="MIT", doc_count=4)]},
        )
        payload = json.loads(format_results(results, OutputFormat.JSON, detailed=True))
        assert payload["aggregations"] == {"package_license_set": {"MIT": 4}}


class TestChannelsTable:
    """Channel listing."""

    def test_rows(self) -> None:
        """Each channel is listed with its kind."""
        buffer = io.StringIO()
        table = channels_table(
            [NixChannel.UNSTABLE, NixChannel.from_value("nixos-24.11"), NixChannel.from_value("nixos-25.05-beta")]
        )
        Console(file=buffer, width=120).print(table)
        output = buffer.getvalue()
        assert "nixos-unstable" in output
        assert "nixos-24.11" in output
        assert "beta" in output
