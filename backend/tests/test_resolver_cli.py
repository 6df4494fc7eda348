"""Tests for the Typer-based resolver CLI."""
from __future__ import annotations

import importlib
import json
import sys
from pathlib import Path
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient
from typer.testing import CliRunner

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.resolver_api import create_app  # noqa: E402
from backend.resolver_api.settings import ResolverSettings  # noqa: E402
from backend.resolver_cli import app as cli_app  # noqa: E402
from backend.resolver_cli import client as client_module  # noqa: E402

CURRENT = "https://vpt.pixelsport.to:443/psportsgate/psportsgate100"
LEGACY = "https://vp.pixelsport.to:443/psportsgate/psportsgate100"

cli_app_module = importlib.import_module("backend.resolver_cli.app")


def _feed_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"sources": [{"id": 5, "url": f"{CURRENT}/5.m3u8"}]})


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def cli_client() -> TestClient:
    """Provide a TestClient and patch the CLI HTTP client factory."""

    settings = ResolverSettings(feed_base_url="http://feed.test", max_retries=0)
    app = create_app(settings=settings, feed_transport=httpx.MockTransport(_feed_handler))
    test_client = TestClient(app)

    original_factory = client_module.create_client
    original_app_factory = cli_app_module.create_client

    def _factory(base_url: str, *, timeout: float = 10.0, transport: Any = None):  # type: ignore[override]
        return test_client

    client_module.create_client = _factory  # type: ignore[assignment]
    cli_app_module.create_client = _factory  # type: ignore[assignment]

    yield test_client

    client_module.create_client = original_factory  # type: ignore[assignment]
    cli_app_module.create_client = original_app_factory  # type: ignore[assignment]


def test_cli_health_command_outputs_status(runner: CliRunner, cli_client: TestClient) -> None:
    result = runner.invoke(cli_app, ["health"])

    assert result.exit_code == 0
    assert "\"status\": \"ok\"" in result.output


def test_cli_resolve_prints_resolution(runner: CliRunner, cli_client: TestClient) -> None:
    result = runner.invoke(cli_app, ["resolve", f"{LEGACY}/150.m3u8"])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["url"] == f"{CURRENT}/187.m3u8"
    assert payload["source"] == "standardized"


def test_cli_resolve_url_only_with_league(runner: CliRunner, cli_client: TestClient) -> None:
    result = runner.invoke(cli_app, ["resolve", f"{LEGACY}/20.m3u8", "--league", "NHL", "--url-only"])

    assert result.exit_code == 0
    assert result.output.strip() == f"{CURRENT}/20.m3u8"


def test_cli_resolve_rejects_unknown_league(runner: CliRunner, cli_client: TestClient) -> None:
    result = runner.invoke(cli_app, ["resolve", f"{LEGACY}/20.m3u8", "--league", "cricket"])

    assert result.exit_code == 1
    assert "Invalid league" in result.output


def test_cli_fallback_command(runner: CliRunner, cli_client: TestClient) -> None:
    result = runner.invoke(cli_app, ["fallback", f"{CURRENT}/187.m3u8"])

    assert result.exit_code == 0
    assert json.loads(result.output)["fallback_url"] == f"{LEGACY}/187.m3u8"


def test_cli_fallback_without_known_domain_fails(runner: CliRunner, cli_client: TestClient) -> None:
    result = runner.invoke(cli_app, ["fallback", "https://cdn.example.com/a.m3u8"])

    assert result.exit_code == 1
    assert "No fallback domain" in result.output


def test_cli_stream_id_command(runner: CliRunner, cli_client: TestClient) -> None:
    result = runner.invoke(cli_app, ["stream-id", f"{CURRENT}/110.m3u8"])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["stream_id"] == "110"
    assert payload["league"] == "nba"


def test_cli_cache_refresh_then_show(runner: CliRunner, cli_client: TestClient) -> None:
    refresh = runner.invoke(cli_app, ["cache", "refresh"])

    assert refresh.exit_code == 0
    assert json.loads(refresh.output)["size"] == 1

    show = runner.invoke(cli_app, ["cache", "show"])
    assert show.exit_code == 0
    assert json.loads(show.output)["size"] == 1


def test_cli_module_entry_point_runs_typer_app(runner: CliRunner, cli_client: TestClient) -> None:
    main_module = importlib.import_module("backend.resolver_cli.__main__")

    assert main_module.main is cli_app_module.main
