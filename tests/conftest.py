"""Shared fixtures: an in-memory document search service."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from nixsearch.core.config import Settings
from nixsearch.protocols.search import RawSearchResponse

Outcome = RawSearchResponse | BaseException


def package_source(attr_name: str = "ripgrep", version: str = "14.1.0", **extra: Any) -> dict[str, Any]:
    """Minimal package ``_source`` as served by the backend."""
    source: dict[str, Any] = {
        "type": "package",
        "package_attr_name": attr_name,
        "package_attr_set": "No package set",
        "package_pname": attr_name,
        "package_pversion": version,
        "package_system": "x86_64-linux",
        "package_description": f"{attr_name} description",
    }
    source.update(extra)
    return source


def option_source(name: str = "services.nginx.enable", **extra: Any) -> dict[str, Any]:
    source: dict[str, Any] = {
        "type": "option",
        "option_name": name,
        "option_description": "Whether to enable nginx.",
        "option_type": "boolean",
        "option_default": "false",
    }
    source.update(extra)
    return source


def make_response(sources: list[dict[str, Any]], total: int | None = None, **kwargs: Any) -> RawSearchResponse:
    return RawSearchResponse(
        hits=[{"_source": s} for s in sources],
        total=total if total is not None else len(sources),
        **kwargs,
    )


class FakeSearchService:
    """Document search service that replays scripted outcomes.

    Each outcome is either a response to return or an exception to raise;
    the last outcome repeats once the script runs out.
    """

    def __init__(
        self,
        outcomes: list[Outcome] | None = None,
        aliases: list[str] | None = None,
    ) -> None:
        self.outcomes: list[Outcome] = outcomes or [make_response([])]
        self.aliases = aliases if aliases is not None else []
        self.calls: list[tuple[str, dict[str, Any], float | None]] = []
        self.alias_calls: list[str] = []
        self.closed = False
        self.aclosed = False

    def _next(self) -> RawSearchResponse:
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def search(self, index: str, body: dict[str, Any], *, timeout: float | None = None) -> RawSearchResponse:
        self.calls.append((index, body, timeout))
        return self._next()

    async def search_async(
        self, index: str, body: dict[str, Any], *, timeout: float | None = None
    ) -> RawSearchResponse:
        self.calls.append((index, body, timeout))
        return self._next()

    def list_aliases(self, pattern: str) -> list[str]:
        self.alias_calls.append(pattern)
        return list(self.aliases)

    async def list_aliases_async(self, pattern: str) -> list[str]:
        self.alias_calls.append(pattern)
        return list(self.aliases)

    def close(self) -> None:
        self.closed = True

    async def aclose(self) -> None:
        self.aclosed = True


DISCOVERED_ALIASES = [
    "latest-44-nixos-unstable",
    "latest-44-nixos-24.05",
    "latest-44-nixos-24.11",
    "latest-44-nixos-25.05-beta",
    "latest-44-group-manual",
]


@pytest.fixture(autouse=True)
def user_config_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Keep Settings away from the real environment and config files.

    Runs each test in an empty directory with no ``NIXSEARCH_`` variables
    and points the user config file at a path under ``tmp_path``.
    """
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("NIXSEARCH_"):
            monkeypatch.delenv(name)
    path = tmp_path / "user-config.json"
    monkeypatch.setitem(Settings.model_config, "json_file", (path, Path("nixsearch.json")))
    return path


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, max_retries=3)


@pytest.fixture
def service_factory() -> Callable[..., FakeSearchService]:
    return FakeSearchService


@pytest.fixture
def fake_service() -> FakeSearchService:
    return FakeSearchService(aliases=list(DISCOVERED_ALIASES))


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Record retry backoff delays instead of sleeping."""
    delays: list[float] = []

    async def fake_async_sleep(delay: float) -> None:
        delays.append(delay)

    monkeypatch.setattr("nixsearch.utils.retry.time.sleep", delays.append)
    monkeypatch.setattr("nixsearch.utils.retry.asyncio.sleep", fake_async_sleep)
    return delays


@pytest.fixture
def package_doc() -> Callable[..., dict[str, Any]]:
    return package_source


@pytest.fixture
def option_doc() -> Callable[..., dict[str, Any]]:
    return option_source


@pytest.fixture
def response_factory() -> Callable[..., RawSearchResponse]:
    return make_response


@pytest.fixture(autouse=True)
def reset_nixsearch_logger() -> Iterator[None]:
    """Undo configure_logging so caplog sees nixsearch records."""
    yield
    logger = logging.getLogger("nixsearch")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
