"""CLI interface using typer."""

import asyncio
import json
from typing import Any

import httpx
import typer

from .bindings import anything, on
from .config import settings
from .core.fetcher import HttpFetcher
from .core.protocols import Response
from .dispatcher import dispatch
from .logs import configure_logging
from .media_type import APPLICATION_JSON, APPLICATION_JSON_ALL, TEXT_ALL
from .router import RouteResult
from .selectors import content_type, series
from .status import Series

app = typer.Typer(
    name="switchyard",
    help="Fetch a URL and route the response by status and content type",
    no_args_is_help=True,
)

MAX_TEXT_CHARS = 2000


def _show_json(value: Any) -> int:
    typer.echo(json.dumps(value, indent=2, ensure_ascii=False))
    return 0


def _show_text(text: str) -> int:
    typer.echo(text[:MAX_TEXT_CHARS])
    if len(text) > MAX_TEXT_CHARS:
        typer.echo(f"\n... (truncated, {len(text)} chars total)")
    return 0


def _show_bytes(data: bytes) -> int:
    typer.echo(f"<{len(data)} bytes of binary content>")
    return 0


def _show_redirect(response: Response) -> int:
    location = response.headers.get("location", "<no location>")
    typer.echo(f"Redirect {response.status} -> {location}")
    return 0


def _show_error(text: str) -> int:
    typer.echo(text[:MAX_TEXT_CHARS], err=True)
    return 1


def route_response(response: Response) -> RouteResult:
    """Print a response according to its series and content type.

    The result value is the process exit code.
    """
    return dispatch(
        response,
        series(),
        on(Series.SUCCESSFUL).dispatch(
            content_type(),
            on(APPLICATION_JSON).call(_show_json, object),
            on(APPLICATION_JSON_ALL).call(_show_json, object),
            on(TEXT_ALL).call(_show_text, str),
            anything().call(_show_bytes, bytes),
        ),
        on(Series.REDIRECTION).call(_show_redirect),
        anything().call(_show_error, str),
    )


async def _fetch(url: str, method: str, follow_redirects: bool) -> Response:
    async with HttpFetcher(
        timeout=settings.timeout,
        user_agent=settings.user_agent,
        max_connections=settings.max_connections,
        max_keepalive_connections=settings.max_keepalive_connections,
        follow_redirects=follow_redirects,
    ) as fetcher:
        return await fetcher.fetch(url, method=method)


@app.command()
def fetch(
    url: str = typer.Argument(..., help="URL to fetch"),
    method: str = typer.Option("GET", "-X", "--method", help="HTTP method"),
    follow_redirects: bool = typer.Option(True, "--follow/--no-follow", help="Follow redirects"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log dispatch decisions"),
):
    """Fetch a URL and print the response body by content type."""
    configure_logging("DEBUG" if verbose else None)

    try:
        response = asyncio.run(_fetch(url, method.upper(), follow_redirects))
    except httpx.HTTPError as e:
        typer.echo(f"Request failed: {e}", err=True)
        raise typer.Exit(2)

    typer.echo(f"Status: {response.status} {response.reason or ''}".rstrip(), err=True)
    typer.echo(f"Content-Type: {response.content_type or '<none>'}", err=True)

    result = route_response(response)
    raise typer.Exit(result.value)


@app.command()
def version():
    """Show version."""
    from . import __version__

    typer.echo(f"switchyard {__version__}")


if __name__ == "__main__":
    app()
