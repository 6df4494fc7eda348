"""
Stream URL resolution for vendor m3u8 links.
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import time
from dataclasses import asdict, dataclass
from typing import Callable, Literal, Optional

from .constants import DEFAULT_FALLBACK_STREAM_URL
from .domains import standardize_domain
from .leagues import normalize_all, normalize_for_league
from .refresh import RefreshScheduler
from .source_cache import SourceCache
from .stream_ids import extract_stream_id

logger = logging.getLogger(__name__)

ResolutionSource = Literal["fallback", "cache", "standardized", "passthrough"]


@dataclass(slots=True)
class Resolution:
    """Outcome of resolving a single URL."""

    original_url: str
    url: str
    stream_id: str | None
    source: ResolutionSource


class StreamUrlResolver:
    """Map caller-supplied stream URLs to the URL that is currently serving.

    Resolution never waits on the network. A stale cache schedules a
    background refresh and the current call is answered from whatever the
    cache holds right now, or by standardizing the URL locally.
    """

    def __init__(
        self,
        cache: SourceCache,
        scheduler: RefreshScheduler | None = None,
        *,
        fallback_stream_url: str = DEFAULT_FALLBACK_STREAM_URL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cache = cache
        self._scheduler = scheduler
        self._fallback_stream_url = fallback_stream_url
        self._clock = clock

    @property
    def cache(self) -> SourceCache:
        return self._cache

    def resolve(self, original_url: str | None, league: Optional[str] = None) -> str:
        return self.resolve_detailed(original_url, league=league).url

    def resolve_detailed(self, original_url: str | None, league: Optional[str] = None) -> Resolution:
        raw = original_url or ""
        clean_url = raw.strip()
        if not clean_url:
            return Resolution(raw, self._fallback_stream_url, None, "fallback")

        self._refresh_if_stale()

        stream_id = extract_stream_id(clean_url)
        if stream_id is None:
            return Resolution(raw, clean_url, None, "passthrough")

        cached = self._cache.lookup(stream_id, league=league)
        if cached:
            logger.debug(f"Using fresh URL for stream {stream_id}: {cached}")
            return Resolution(raw, cached, stream_id, "cache")

        standardized = standardize_domain(clean_url)
        if league:
            final_url = normalize_for_league(standardized, league)
        else:
            final_url = normalize_all(standardized)
        return Resolution(raw, final_url, stream_id, "standardized")

    def _refresh_if_stale(self) -> None:
        now = self._clock()
        if not self._cache.is_stale(now):
            return
        if self._scheduler is None:
            return
        logger.info("Stream source cache is stale; scheduling refresh")
        if self._scheduler.trigger():
            self._cache.touch(now)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve a vendor stream URL offline.")
    parser.add_argument("url", help="Stream URL to resolve")
    parser.add_argument("--league", choices=("nhl", "nfl", "nba", "mlb"), help="Optional league tag")
    parser.add_argument(
        "--fallback-url",
        default=DEFAULT_FALLBACK_STREAM_URL,
        help="URL returned when the input is empty",
    )
    return parser.parse_args()


class _NoFeed:
    async def fetch_latest(self):  # pragma: no cover - offline mode never refreshes
        return []


def main() -> None:
    args = parse_args()
    resolver = StreamUrlResolver(SourceCache(_NoFeed()), fallback_stream_url=args.fallback_url)
    resolution = resolver.resolve_detailed(args.url, league=args.league)
    output_json = json.dumps(asdict(resolution), indent=2, ensure_ascii=False)
    os.write(1, (output_json + "\n").encode("utf-8", "replace"))


if __name__ == "__main__":
    main()
