"""Tool layer for agent integrations.

Each tool maps structured parameters onto builder calls and returns plain
result objects: a :class:`SearchPage` envelope for searches, a single
document (or None) for detail lookups. Channels are given as keywords
(``unstable``, ``stable``, ``beta``, ``flakes``) and resolved against the
channels the backend serves.

Example:
    >>> from nixsearch.search.client import create_client
    >>> from nixsearch.tools import search_packages
    >>> page = await search_packages(create_client(), "ripgrep", size=5)  # doctest: +SKIP
    >>> page.has_more  # doctest: +SKIP
    True
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from nixsearch.core.exceptions import ValidationError
from nixsearch.models.option import NixOption
from nixsearch.models.package import NixPackage
from nixsearch.models.results import SearchPage, SearchWarning
from nixsearch.search.client import NixSearchClient
from nixsearch.search.request import DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
DETAILS_PAGE_SIZE = 10


def _page_window(page: int, size: int) -> tuple[int, list[SearchWarning]]:
    """Validate paging and clamp oversized pages."""
    if page < 0:
        raise ValidationError(f"page must be >= 0, got {page}", parameter="page")
    if size <= 0:
        raise ValidationError(f"size must be > 0, got {size}", parameter="size")
    warnings: list[SearchWarning] = []
    if size > MAX_PAGE_SIZE:
        warnings.append(
            SearchWarning(
                code="SIZE_CLAMPED",
                message=f"size {size} exceeds the maximum of {MAX_PAGE_SIZE}; using {MAX_PAGE_SIZE}",
                parameter="size",
            )
        )
        size = MAX_PAGE_SIZE
    return size, warnings


async def search_packages(
    client: NixSearchClient,
    query: str,
    channel: str = "unstable",
    *,
    platform: Sequence[str] = (),
    package_set: Sequence[str] = (),
    license: Sequence[str] = (),
    maintainer: Sequence[str] = (),
    team: Sequence[str] = (),
    page: int = 0,
    size: int = DEFAULT_PAGE_SIZE,
) -> SearchPage[NixPackage]:
    """Search nixpkgs packages.

    Args:
        client: Search facade.
        query: Package name, description keywords, etc.
        channel: Channel keyword.
        platform: Platforms, e.g. ``x86_64-linux``.
        package_set: Package sets, e.g. ``python3Packages``.
        license: License identifiers.
        maintainer: Maintainer handles.
        team: Team names.
        page: Page number, 0-based.
        size: Results per page, at most 100.

    Raises:
        ValidationError: If a parameter is out of range or the channel
            keyword is unknown.
        ChannelResolutionError: If the channel is not served.
        SearchRequestError: If the backend rejects the query.
    """
    logger.info(f"Searching packages: query='{query}', channel='{channel}', page={page}, size={size}")
    size, warnings = _page_window(page, size)
    nix_channel = await client.resolve_channel_async(channel)

    builder = client.packages().with_query(query).for_channel(nix_channel).page(page * size, size)
    for name, values in (
        ("platforms", platform),
        ("package sets", package_set),
        ("licenses", license),
        ("maintainers", maintainer),
        ("teams", team),
    ):
        if values:
            logger.debug(f"Filtering by {name}: {', '.join(values)}")
    builder.with_platform(*platform)
    builder.with_package_set(*package_set)
    builder.with_license(*license)
    builder.with_maintainer(*maintainer)
    builder.with_team(*team)

    results = await builder.execute_async()
    logger.info(f"Search completed: found {results.total} packages, returning {len(results.documents)} results")
    return SearchPage[NixPackage].create(
        results.documents, total=results.total, page=page, size=size, warnings=warnings
    )


async def search_options(
    client: NixSearchClient,
    query: str,
    channel: str = "unstable",
    *,
    page: int = 0,
    size: int = DEFAULT_PAGE_SIZE,
) -> SearchPage[NixOption]:
    """Search NixOS configuration options.

    Raises:
        ValidationError: If a parameter is out of range or the channel
            keyword is unknown.
        ChannelResolutionError: If the channel is not served.
        SearchRequestError: If the backend rejects the query.
    """
    logger.info(f"Searching options: query='{query}', channel='{channel}', page={page}, size={size}")
    size, warnings = _page_window(page, size)
    nix_channel = await client.resolve_channel_async(channel)

    builder = client.options().with_query(query).for_channel(nix_channel).page(page * size, size)
    results = await builder.execute_async()
    logger.info(f"Search completed: found {results.total} options, returning {len(results.documents)} results")
    return SearchPage[NixOption].create(
        results.documents, total=results.total, page=page, size=size, warnings=warnings
    )


async def get_package_details(
    client: NixSearchClient,
    attr_name: str,
    channel: str = "unstable",
) -> NixPackage | None:
    """Package whose attribute name equals ``attr_name`` (case-insensitive).

    Returns None when no hit among the top results matches exactly.
    """
    logger.info(f"Getting package details: attr_name='{attr_name}', channel='{channel}'")
    nix_channel = await client.resolve_channel_async(channel)
    results = await (
        client.packages().with_query(attr_name).for_channel(nix_channel).page(0, DETAILS_PAGE_SIZE).execute_async()
    )
    wanted = attr_name.casefold()
    package = next((p for p in results.documents if p.attr_name.casefold() == wanted), None)
    if package is None:
        logger.warning(f"Package not found: attr_name='{attr_name}', channel='{channel}'")
        return None
    logger.info(f"Package found: {package.attr_name} {package.version}")
    return package


async def get_option_details(
    client: NixSearchClient,
    option_name: str,
    channel: str = "unstable",
) -> NixOption | None:
    """Option whose name equals ``option_name`` (case-insensitive), or None."""
    logger.info(f"Getting option details: option_name='{option_name}', channel='{channel}'")
    nix_channel = await client.resolve_channel_async(channel)
    results = await (
        client.options().with_query(option_name).for_channel(nix_channel).page(0, DEFAULT_PAGE_SIZE).execute_async()
    )
    wanted = option_name.casefold()
    option = next((o for o in results.documents if o.name.casefold() == wanted), None)
    if option is None:
        logger.warning(f"Option not found: option_name='{option_name}', channel='{channel}'")
        return None
    logger.info(f"Option found: {option.name}")
    return option
