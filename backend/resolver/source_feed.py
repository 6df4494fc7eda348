"""HTTP client for the "latest stream sources" feed."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin

import httpx
from pydantic import BaseModel, ValidationError

from .constants import STREAM_MAPPING_VERSION

logger = logging.getLogger(__name__)

LATEST_SOURCES_PATH = "api/stream-sources/latest"

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


class SourceFeedError(RuntimeError):
    """Raised when the latest-sources feed cannot be fetched or understood."""


@dataclass(frozen=True, slots=True)
class SourceRecord:
    """One stream source as published by the feed."""

    id: int
    url: str


class _FeedRecord(BaseModel):
    id: int
    url: str | None = None
    stream_url: str | None = None


class _FeedPayload(BaseModel):
    sources: list[Any]


class SourceFeedClient:
    """Fetch stream source records from the feed with cache-defeating requests.

    The underlying :class:`httpx.AsyncClient` keeps one cookie jar for the
    lifetime of the client, so session credentials issued by the feed host are
    sent with every refresh.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 5.0,
        mapping_version: int = STREAM_MAPPING_VERSION,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._mapping_version = mapping_version
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def url(self) -> str:
        normalized_base = self._base_url.rstrip("/") + "/"
        return urljoin(normalized_base, LATEST_SOURCES_PATH)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)
        return self._client

    async def fetch_latest(self) -> list[SourceRecord]:
        """Return the records currently published by the feed."""

        params = {"_": str(int(time.time() * 1000)), "v": str(self._mapping_version)}
        try:
            response = await self._get_client().get(self.url, params=params, headers=NO_CACHE_HEADERS)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise SourceFeedError(
                f"Stream source feed responded with HTTP {exc.response.status_code}"
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise SourceFeedError(f"Failed to contact stream source feed: {exc}") from exc

        try:
            payload = _FeedPayload.model_validate(response.json())
        except ValueError as exc:
            raise SourceFeedError("Stream source feed returned a malformed body") from exc

        return parse_records(payload.sources)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def parse_records(items: list[Any]) -> list[SourceRecord]:
    """Convert raw feed items to records, skipping entries without an id or URL."""

    records: list[SourceRecord] = []
    for item in items:
        try:
            record = _FeedRecord.model_validate(item)
        except ValidationError:
            logger.debug(f"Skipping malformed stream source entry: {item!r}")
            continue
        url = record.url or record.stream_url
        if not record.id or not url:
            continue
        records.append(SourceRecord(id=record.id, url=url))
    return records
