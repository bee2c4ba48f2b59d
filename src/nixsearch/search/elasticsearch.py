"""Elasticsearch-backed document search service.

Wraps the blocking and async ``elasticsearch-py`` clients behind the
:class:`~nixsearch.protocols.search.DocumentSearchService` protocol:

- connection errors and timeouts are raised unchanged so the executor can
  retry them;
- an error response from the backend (``ApiError``) becomes an invalid
  :class:`RawSearchResponse` carrying the server's reason;
- any other transport failure becomes an invalid response carrying the
  native exception.

Example:
    >>> from nixsearch.core.config import Settings
    >>> from nixsearch.search.elasticsearch import ElasticsearchService
    >>> service = ElasticsearchService.from_settings(Settings())
"""

from __future__ import annotations

from typing import Any

from elasticsearch import ApiError, AsyncElasticsearch, Elasticsearch, TransportError
from elasticsearch import ConnectionError as ESConnectionError
from elasticsearch import ConnectionTimeout as ESConnectionTimeout

from nixsearch.core.config import Settings
from nixsearch.protocols.search import RawSearchResponse, ServerError


def _server_error(exc: ApiError) -> ServerError:
    """Extract ``error.type`` / ``error.reason`` from an API error body."""
    body = exc.body if isinstance(exc.body, dict) else {}
    error = body.get("error")
    if isinstance(error, dict):
        return ServerError(status=_status(exc), type=error.get("type"), reason=error.get("reason"))
    if isinstance(error, str):
        return ServerError(status=_status(exc), reason=error)
    return ServerError(status=_status(exc), reason=str(exc.message) if exc.message else None)


def _status(exc: ApiError) -> int | None:
    status = getattr(exc.meta, "status", None)
    return status if isinstance(status, int) else None


def _search_params(body: dict[str, Any]) -> dict[str, Any]:
    # "from" is a Python keyword; the client takes it as from_
    params = dict(body)
    if "from" in params:
        params["from_"] = params.pop("from")
    return params


def _aliases(records: Any) -> list[str]:
    return [record["alias"] for record in records or [] if record.get("alias")]


class ElasticsearchService:
    """Document search service over Elasticsearch.

    Clients are created lazily, so constructing the service performs no I/O.
    Client-level retries are disabled; retrying is the executor's job.

    Args:
        client: Blocking client, or None to build one from ``client_kwargs``.
        async_client: Async client, or None to build one from ``client_kwargs``.
        **client_kwargs: Arguments for lazily created clients.
    """

    def __init__(
        self,
        client: Elasticsearch | None = None,
        async_client: AsyncElasticsearch | None = None,
        **client_kwargs: Any,
    ) -> None:
        self._client = client
        self._async_client = async_client
        self._client_kwargs = client_kwargs

    @classmethod
    def from_settings(cls, settings: Settings) -> ElasticsearchService:
        """Service configured with the backend URL, credentials and timeout."""
        kwargs: dict[str, Any] = {
            "hosts": [settings.url],
            "request_timeout": settings.timeout,
            "max_retries": 0,
            "retry_on_timeout": False,
            "http_compress": True,
        }
        if settings.username:
            kwargs["basic_auth"] = (settings.username, settings.password or "")
        return cls(**kwargs)

    @property
    def client(self) -> Elasticsearch:
        if self._client is None:
            self._client = Elasticsearch(**self._client_kwargs)
        return self._client

    @property
    def async_client(self) -> AsyncElasticsearch:
        if self._async_client is None:
            self._async_client = AsyncElasticsearch(**self._client_kwargs)
        return self._async_client

    def search(self, index: str, body: dict[str, Any], *, timeout: float | None = None) -> RawSearchResponse:
        client = self.client if timeout is None else self.client.options(request_timeout=timeout)
        try:
            response = client.search(index=index, **_search_params(body))
        except (ESConnectionError, ESConnectionTimeout):
            raise
        except ApiError as e:
            return RawSearchResponse.failed(server_error=_server_error(e))
        except TransportError as e:
            return RawSearchResponse.failed(original_exception=e)
        return RawSearchResponse.from_body(response.body)

    async def search_async(
        self, index: str, body: dict[str, Any], *, timeout: float | None = None
    ) -> RawSearchResponse:
        client = self.async_client if timeout is None else self.async_client.options(request_timeout=timeout)
        try:
            response = await client.search(index=index, **_search_params(body))
        except (ESConnectionError, ESConnectionTimeout):
            raise
        except ApiError as e:
            return RawSearchResponse.failed(server_error=_server_error(e))
        except TransportError as e:
            return RawSearchResponse.failed(original_exception=e)
        return RawSearchResponse.from_body(response.body)

    def list_aliases(self, pattern: str) -> list[str]:
        response = self.client.cat.aliases(name=pattern, format="json")
        return _aliases(response.body)

    async def list_aliases_async(self, pattern: str) -> list[str]:
        response = await self.async_client.cat.aliases(name=pattern, format="json")
        return _aliases(response.body)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    async def aclose(self) -> None:
        if self._async_client is not None:
            await self._async_client.close()
            self._async_client = None
        self.close()
