"""Rendering of search results for the command line.

Text output lists one block per document; ``detailed`` adds the less
commonly needed fields. JSON output is the documents' snake_case model
dump plus the total hit count.

Example:
    >>> from nixsearch.models.results import SearchResults
    >>> from nixsearch.output import format_text
    >>> print(format_text(SearchResults(total=0)))
    Found 0 results
    <BLANKLINE>
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Any

import orjson
from pydantic import BaseModel
from rich.table import Table

from nixsearch.models.option import NixOption
from nixsearch.models.package import NixPackage
from nixsearch.models.results import SearchResults
from nixsearch.search.channel import NixChannel


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


def _line(lines: list[str], label: str, value: str | None) -> None:
    if value:
        lines.append(f"  {label}: {value}")


def _joined(values: Iterable[str | None]) -> str:
    return ", ".join(v for v in values if v)


def package_lines(package: NixPackage, detailed: bool = False) -> list[str]:
    lines = [
        f"Package: {package.attr_name}",
        f"  Name: {package.name}",
        f"  Version: {package.version}",
    ]
    _line(lines, "Description", package.description)
    if not detailed:
        return lines

    _line(lines, "Platforms", _joined(package.platforms))
    _line(lines, "Programs", _joined(package.programs))
    _line(lines, "Main Program", package.main_program)
    _line(lines, "License", _joined(lic.full_name for lic in package.license))
    _line(lines, "Maintainers", _joined(m.name or m.email for m in package.maintainers))
    _line(lines, "Homepage", _joined(package.homepage or []))
    _line(lines, "Long Description", package.long_description)
    _line(lines, "Position", package.position)
    _line(lines, "Attribute Set", package.attr_set)
    _line(lines, "System", package.system)
    if package.flake_resolved is not None:
        _line(lines, "Flake", package.flake_resolved.display_url)
    return lines


def option_lines(option: NixOption, detailed: bool = False) -> list[str]:
    lines = [f"Option: {option.name}"]
    _line(lines, "Description", option.description)
    if not detailed:
        return lines

    _line(lines, "Type", option.type)
    _line(lines, "Default", option.default)
    _line(lines, "Example", option.example)
    _line(lines, "Source", option.source)
    flake = option.flake if isinstance(option.flake, str) else _joined(option.flake or [])
    _line(lines, "Flake", flake)
    return lines


def format_text(results: SearchResults[Any], detailed: bool = False) -> str:
    """Human-readable listing of a result page."""
    lines = [f"Found {results.total} results", ""]
    for document in results.documents:
        if isinstance(document, NixPackage):
            lines.extend(package_lines(document, detailed))
        elif isinstance(document, NixOption):
            lines.extend(option_lines(document, detailed))
        lines.append("")
    return "\n".join(lines)


def format_json(results: SearchResults[Any], detailed: bool = False) -> str:
    """JSON document with ``total`` and ``results`` (and facets when detailed)."""
    payload: dict[str, Any] = {
        "total": results.total,
        "results": [_dump(d) for d in results.documents],
    }
    if detailed and results.aggregations:
        payload["aggregations"] = {
            name: {b.key: b.doc_count for b in buckets} for name, buckets in results.aggregations.items()
        }
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode()


def format_results(results: SearchResults[Any], output_format: OutputFormat, detailed: bool = False) -> str:
    if output_format is OutputFormat.JSON:
        return format_json(results, detailed)
    return format_text(results, detailed)


def channels_table(channels: Iterable[NixChannel]) -> Table:
    """Table of discovered channels and their classification."""
    table = Table(title="Available channels")
    table.add_column("Channel", style="cyan")
    table.add_column("Kind")
    for channel in channels:
        table.add_row(channel.value, _kind(channel))
    return table


def _kind(channel: NixChannel) -> str:
    if channel.is_unstable:
        return "unstable"
    if channel.is_flakes:
        return "flakes"
    if channel.is_beta:
        return "beta"
    if channel.is_stable:
        return "stable"
    return ""


def _dump(document: Any) -> Any:
    if isinstance(document, BaseModel):
        return document.model_dump(mode="json", exclude_none=True)
    return document
