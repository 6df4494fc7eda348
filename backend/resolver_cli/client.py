"""HTTP client factory used by the resolver CLI commands."""
from __future__ import annotations

import httpx

JSON_HEADERS = {"Accept": "application/json"}


def create_client(base_url: str, *, timeout: float = 10.0, transport: httpx.BaseTransport | None = None) -> httpx.Client:
    """Return a JSON-speaking client bound to the resolver service at ``base_url``."""

    return httpx.Client(
        base_url=base_url,
        timeout=timeout,
        transport=transport,
        headers=JSON_HEADERS,
        follow_redirects=True,
    )
