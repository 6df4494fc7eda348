"""Command line interface for the stream URL resolver service."""
from __future__ import annotations

import json
from typing import Any, Optional

import typer

from .client import create_client


DEFAULT_API_BASE = "http://localhost:8000"

app = typer.Typer(help="Resolve vendor stream URLs through the resolver service.")
cache_app = typer.Typer(help="Inspect and refresh the stream source cache.")
app.add_typer(cache_app, name="cache")


LEAGUE_CHOICES = {"nhl", "nfl", "nba", "mlb"}


def _api_base_option() -> typer.Option:
    return typer.Option(
        DEFAULT_API_BASE,
        "--api-base",
        help="Base URL for the resolver service.",
        show_default=True,
        envvar="SPORTSTREAM_RESOLVER_API_BASE",
    )


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command()
def health(api_base: str = _api_base_option()) -> None:
    """Call the /health endpoint and pretty-print the response."""

    with create_client(api_base) as client:
        response = client.get("/health")
        response.raise_for_status()
        _echo_json(response.json())


@app.command()
def resolve(
    url: str = typer.Argument(..., help="Stream URL to resolve."),
    league: Optional[str] = typer.Option(
        None,
        help="Only apply id normalization for this league (nhl, nfl, nba, mlb).",
    ),
    url_only: bool = typer.Option(
        False,
        "--url-only/--full",
        help="Print just the resolved URL instead of the full JSON payload.",
        show_default=True,
    ),
    api_base: str = _api_base_option(),
) -> None:
    """Resolve a stream URL to the URL currently serving it."""

    params: dict[str, str] = {"url": url}
    if league is not None:
        normalized = league.strip().lower()
        if normalized not in LEAGUE_CHOICES:
            allowed = ", ".join(sorted(LEAGUE_CHOICES))
            typer.echo(f"Invalid league '{league}'. Choose from: {allowed}.", err=True)
            raise typer.Exit(code=1)
        params["league"] = normalized

    with create_client(api_base) as client:
        response = client.get("/streams/resolve", params=params)
        response.raise_for_status()
        payload = response.json()

    if url_only:
        typer.echo(payload["url"])
    else:
        _echo_json(payload)


@app.command()
def fallback(
    url: str = typer.Argument(..., help="Stream URL to switch domains for."),
    api_base: str = _api_base_option(),
) -> None:
    """Show the same stream on the alternate vendor domain."""

    with create_client(api_base) as client:
        response = client.get("/streams/fallback", params={"url": url})
        response.raise_for_status()
        payload = response.json()

    if payload.get("fallback_url") is None:
        typer.echo("No fallback domain available for this URL.", err=True)
        raise typer.Exit(code=1)
    _echo_json(payload)


@app.command("stream-id")
def stream_id(
    url: str = typer.Argument(..., help="Stream URL to inspect."),
    api_base: str = _api_base_option(),
) -> None:
    """Show the stream id, league and channel type for a URL."""

    with create_client(api_base) as client:
        response = client.get("/streams/id", params={"url": url})
        response.raise_for_status()
        _echo_json(response.json())


@cache_app.command("show")
def show_cache(api_base: str = _api_base_option()) -> None:
    """Display the stream source cache status."""

    with create_client(api_base) as client:
        response = client.get("/cache")
        response.raise_for_status()
        _echo_json(response.json())


@cache_app.command("refresh")
def refresh_cache(
    timeout: float = typer.Option(
        30.0,
        help="Seconds to wait for the refresh cycle, including retries.",
        show_default=True,
    ),
    api_base: str = _api_base_option(),
) -> None:
    """Refresh the stream source cache from the feed now."""

    with create_client(api_base, timeout=timeout) as client:
        response = client.post("/cache/refresh")
        response.raise_for_status()
        _echo_json(response.json())


def main() -> None:
    """Execute the Typer application."""

    app()


if __name__ == "__main__":
    main()
