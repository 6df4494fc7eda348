"""Shared state container for the resolver service."""
from __future__ import annotations

from dataclasses import dataclass

import httpx

from backend.resolver.refresh import RefreshScheduler
from backend.resolver.source_cache import SourceCache
from backend.resolver.source_feed import SourceFeedClient
from backend.resolver.stream_resolver import StreamUrlResolver

from .settings import ResolverSettings


@dataclass(slots=True)
class AppState:
    """Owns the single cache instance and the collaborators built around it."""

    settings: ResolverSettings
    feed: SourceFeedClient
    cache: SourceCache
    scheduler: RefreshScheduler
    resolver: StreamUrlResolver

    def __init__(
        self,
        settings: ResolverSettings,
        *,
        feed_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.feed = SourceFeedClient(
            settings.feed_base_url,
            timeout=settings.feed_timeout_seconds,
            mapping_version=settings.mapping_version,
            transport=feed_transport,
        )
        self.cache = SourceCache(
            self.feed,
            staleness_window=settings.staleness_window_seconds,
            max_retries=settings.max_retries,
            backoff_base=settings.backoff_base_seconds,
            backoff_cap=settings.backoff_cap_seconds,
        )
        self.scheduler = RefreshScheduler(self.cache)
        self.resolver = StreamUrlResolver(
            self.cache,
            self.scheduler,
            fallback_stream_url=settings.fallback_stream_url,
        )

    async def aclose(self) -> None:
        """Stop background refreshes and release the feed connection pool."""

        await self.scheduler.stop()
        await self.feed.aclose()
