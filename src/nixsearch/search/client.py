"""Search facade.

:class:`NixSearchClient` hands out fresh builders that share one service and
one configuration, and discovers which channels the backend currently
serves.

Example:
    >>> from nixsearch.search.client import create_client
    >>> client = create_client()
    >>> builder = client.packages().with_query("firefox")
    >>> channels = client.get_channels()  # doctest: +SKIP
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from nixsearch.core.config import Settings, get_settings
from nixsearch.protocols.search import DocumentSearchService
from nixsearch.search.builders import OptionSearchBuilder, PackageSearchBuilder
from nixsearch.search.channel import NixChannel
from nixsearch.search.elasticsearch import ElasticsearchService
from nixsearch.search.executor import SearchExecutor, SearchObserver

logger = logging.getLogger(__name__)


class NixSearchClient:
    """Entry point for package and option searches.

    Discovered channels are cached for the lifetime of the client. Concurrent
    first calls may each query the backend; the last result wins, which is
    harmless because discovery is idempotent.

    Args:
        service: Document search backend.
        settings: Configuration; defaults to :func:`get_settings`.
        observers: Hooks called around every search dispatch.
    """

    def __init__(
        self,
        service: DocumentSearchService,
        settings: Settings | None = None,
        observers: Sequence[SearchObserver] = (),
    ) -> None:
        self.settings = settings or get_settings()
        self.executor = SearchExecutor(service, self.settings, observers)
        self._channels: tuple[NixChannel, ...] | None = None

    @property
    def service(self) -> DocumentSearchService:
        return self.executor.service

    def packages(self) -> PackageSearchBuilder:
        """New package search builder."""
        return PackageSearchBuilder(self.executor)

    def options(self) -> OptionSearchBuilder:
        """New NixOS option search builder."""
        return OptionSearchBuilder(self.executor)

    def get_channels(self) -> list[NixChannel]:
        """Channels served by the backend, discovered once and cached."""
        if self._channels is None:
            self._channels = self._store(self.executor.list_aliases())
        return list(self._channels)

    async def get_channels_async(self) -> list[NixChannel]:
        """Async variant of :meth:`get_channels`."""
        if self._channels is None:
            self._channels = self._store(await self.executor.list_aliases_async())
        return list(self._channels)

    def resolve_channel(self, name: str) -> NixChannel:
        """Resolve a keyword such as ``stable`` against discovered channels.

        Raises:
            ValidationError: If ``name`` is not a channel keyword.
            ChannelResolutionError: If no discovered channel matches.
        """
        return NixChannel.parse(name, self.get_channels())

    async def resolve_channel_async(self, name: str) -> NixChannel:
        """Async variant of :meth:`resolve_channel`."""
        return NixChannel.parse(name, await self.get_channels_async())

    def close(self) -> None:
        self.service.close()

    async def aclose(self) -> None:
        await self.service.aclose()

    def _store(self, aliases: Iterable[str]) -> tuple[NixChannel, ...]:
        prefix = self.executor.alias_prefix
        values = [
            alias[len(prefix):]
            for alias in aliases
            if alias.startswith(prefix) and alias[len(prefix):].strip()
        ]
        channels = tuple(NixChannel.from_value(v) for v in dict.fromkeys(values))
        logger.info(f"Discovered {len(channels)} channels: {', '.join(str(c) for c in channels)}")
        return channels


def create_client(
    settings: Settings | None = None,
    observers: Sequence[SearchObserver] = (),
) -> NixSearchClient:
    """Client over the Elasticsearch backend configured by ``settings``."""
    settings = settings or get_settings()
    return NixSearchClient(ElasticsearchService.from_settings(settings), settings, observers)
