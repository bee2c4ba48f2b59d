"""CLI entry point."""

from __future__ import annotations

from typing import NoReturn

import pydantic
import typer
from rich.console import Console

from nixsearch.core.config import Settings, get_settings
from nixsearch.core.exceptions import NixSearchError
from nixsearch.core.logging import configure_logging
from nixsearch.output import OutputFormat, channels_table, format_results
from nixsearch.search.client import NixSearchClient, create_client
from nixsearch.search.executor import TRANSIENT_ERRORS
from nixsearch.search.request import DEFAULT_PAGE_SIZE, SortOrder

app = typer.Typer(
    name="nixsearch",
    help="Search NixOS packages and options",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

CHANNEL_HELP = "Channel to search: unstable, stable, beta or flakes"
# document parse failures surface as pydantic errors
CLI_ERRORS = (NixSearchError, pydantic.ValidationError, *TRANSIENT_ERRORS)


def _settings(debug: bool) -> Settings:
    if debug:
        return get_settings(enable_debug_mode=True, log_level="DEBUG")
    return get_settings()


def _open_client(debug: bool) -> NixSearchClient:
    settings = _settings(debug)
    configure_logging(settings.log_level)
    return create_client(settings)


def _fail(exc: BaseException) -> NoReturn:
    err_console.print(f"Error: {exc}", markup=False, highlight=False, soft_wrap=True)
    raise typer.Exit(code=1)


def _emit(text: str, output_format: OutputFormat) -> None:
    if output_format is OutputFormat.JSON:
        typer.echo(text)
    else:
        console.print(text, markup=False, highlight=False, soft_wrap=True)


@app.command()
def packages(
    query: str = typer.Argument(..., help="Package name or description keywords"),
    channel: str = typer.Option("unstable", "--channel", "-c", help=CHANNEL_HELP),
    from_: int = typer.Option(0, "--from", help="Offset of the first result"),
    size: int = typer.Option(DEFAULT_PAGE_SIZE, "--size", "-n", help="Number of results"),
    sort: SortOrder | None = typer.Option(None, "--sort", help="Sort by name instead of relevance"),
    output_format: OutputFormat = typer.Option(OutputFormat.TEXT, "--format", "-f", help="Output format"),
    detailed: bool = typer.Option(False, "--detailed", "-d", help="Show all fields"),
    platform: list[str] | None = typer.Option(None, "--platform", help="Filter by platform (repeatable)"),
    package_set: list[str] | None = typer.Option(None, "--package-set", help="Filter by package set (repeatable)"),
    license: list[str] | None = typer.Option(None, "--license", help="Filter by license (repeatable)"),
    maintainer: list[str] | None = typer.Option(None, "--maintainer", help="Filter by maintainer (repeatable)"),
    team: list[str] | None = typer.Option(None, "--team", help="Filter by team (repeatable)"),
    debug: bool = typer.Option(False, "--debug", help="Log query bodies and responses"),
) -> None:
    """Search packages."""
    client = _open_client(debug)
    try:
        builder = (
            client.packages()
            .with_query(query)
            .for_channel(client.resolve_channel(channel))
            .page(from_, size)
            .sort_by(sort)
            .with_platform(*(platform or ()))
            .with_package_set(*(package_set or ()))
            .with_license(*(license or ()))
            .with_maintainer(*(maintainer or ()))
            .with_team(*(team or ()))
        )
        results = builder.execute()
    except CLI_ERRORS as e:
        _fail(e)
    finally:
        client.close()
    _emit(format_results(results, output_format, detailed), output_format)


@app.command()
def options(
    query: str = typer.Argument(..., help="Option name or description keywords"),
    channel: str = typer.Option("unstable", "--channel", "-c", help=CHANNEL_HELP),
    from_: int = typer.Option(0, "--from", help="Offset of the first result"),
    size: int = typer.Option(DEFAULT_PAGE_SIZE, "--size", "-n", help="Number of results"),
    sort: SortOrder | None = typer.Option(None, "--sort", help="Sort by name instead of relevance"),
    output_format: OutputFormat = typer.Option(OutputFormat.TEXT, "--format", "-f", help="Output format"),
    detailed: bool = typer.Option(False, "--detailed", "-d", help="Show all fields"),
    debug: bool = typer.Option(False, "--debug", help="Log query bodies and responses"),
) -> None:
    """Search NixOS options."""
    client = _open_client(debug)
    try:
        results = (
            client.options()
            .with_query(query)
            .for_channel(client.resolve_channel(channel))
            .page(from_, size)
            .sort_by(sort)
            .execute()
        )
    except CLI_ERRORS as e:
        _fail(e)
    finally:
        client.close()
    _emit(format_results(results, output_format, detailed), output_format)


@app.command()
def channels(
    debug: bool = typer.Option(False, "--debug", help="Log backend requests"),
) -> None:
    """List channels served by the backend."""
    client = _open_client(debug)
    try:
        discovered = client.get_channels()
    except CLI_ERRORS as e:
        _fail(e)
    finally:
        client.close()
    console.print(channels_table(discovered))


@app.command()
def version() -> None:
    """Show version."""
    from nixsearch import __version__

    console.print(f"nixsearch {__version__}")


if __name__ == "__main__":
    app()
