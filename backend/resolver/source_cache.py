"""Process-wide cache of the freshest known URL for each stream id."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterable, Protocol

from .domains import to_current_domain
from .leagues import normalize_all, normalize_for_league
from .source_feed import SourceFeedError, SourceRecord
from .stream_ids import extract_stream_id

logger = logging.getLogger(__name__)

STALENESS_WINDOW_SECONDS = 60.0
MAX_RETRIES = 3
BACKOFF_BASE_SECONDS = 1.0
BACKOFF_CAP_SECONDS = 8.0


class SourceFeed(Protocol):
    async def fetch_latest(self) -> list[SourceRecord]: ...


class RefreshResult(str, Enum):
    UPDATED = "updated"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(slots=True)
class RefreshOutcome:
    """Result of a single refresh attempt."""

    result: RefreshResult
    entries: int = 0
    retry_in: float | None = None
    error: str | None = None


@dataclass(slots=True)
class CacheSnapshot:
    """Point-in-time view of the cache for status reporting."""

    size: int
    stale: bool
    failure_count: int
    last_refresh_age: float | None
    last_success_at: datetime | None
    last_error: str | None


def backoff_delay(
    failure_count: int,
    *,
    base: float = BACKOFF_BASE_SECONDS,
    cap: float = BACKOFF_CAP_SECONDS,
) -> float:
    """Delay before the retry that follows ``failure_count`` consecutive failures."""

    return min(base * (2**failure_count), cap)


def build_mapping(records: Iterable[SourceRecord]) -> dict[str, str]:
    """Key feed records by the id in their URL, falling back to the record id."""

    mapping: dict[str, str] = {}
    for record in records:
        stream_id = extract_stream_id(record.url) or str(record.id)
        mapping[stream_id] = to_current_domain(record.url)
    return mapping


class SourceCache:
    """Mapping of stream id to latest URL, replaced wholesale by each good refresh.

    The cache is never merged incrementally: a successful refresh swaps in a
    brand-new dict in one assignment, so concurrent readers always see either
    the old or the new mapping. A refresh that yields no entries is treated as
    a feed anomaly and leaves the current mapping in place.
    """

    def __init__(
        self,
        feed: SourceFeed,
        *,
        staleness_window: float = STALENESS_WINDOW_SECONDS,
        max_retries: int = MAX_RETRIES,
        backoff_base: float = BACKOFF_BASE_SECONDS,
        backoff_cap: float = BACKOFF_CAP_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._feed = feed
        self._staleness_window = staleness_window
        self._max_retries = max_retries
        self._backoff_base = backoff_base
        self._backoff_cap = backoff_cap
        self._clock = clock
        self._entries: dict[str, str] = {}
        self._last_refresh: float | None = None
        self._last_success_at: datetime | None = None
        self._last_error: str | None = None
        self.failure_count = 0

    @property
    def last_refresh(self) -> float | None:
        return self._last_refresh

    def __len__(self) -> int:
        return len(self._entries)

    def is_stale(self, now: float | None = None) -> bool:
        """True once more than the staleness window has passed since the last refresh."""

        if self._last_refresh is None:
            return True
        current = self._clock() if now is None else now
        return current - self._last_refresh > self._staleness_window

    def touch(self, now: float | None = None) -> None:
        """Record that a refresh has been started so callers stop re-triggering it."""

        self._last_refresh = self._clock() if now is None else now

    def lookup(self, stream_id: str | None, league: str | None = None) -> str | None:
        """Return the cached URL for ``stream_id`` with the league normalizers applied.

        With ``league`` only that league's normalizer runs, matching uncached resolution.
        """

        if not stream_id:
            return None
        url = self._entries.get(str(stream_id))
        if url is None:
            return None
        if league:
            return normalize_for_league(url, league)
        return normalize_all(url)

    def replace(self, mapping: dict[str, str]) -> bool:
        """Swap in ``mapping`` unless it is empty. Returns whether the swap happened."""

        if not mapping:
            return False
        self._entries = dict(mapping)
        return True

    def retry_delay(self) -> float | None:
        """Backoff delay for the current failure count, or ``None`` once retries are spent."""

        if self.failure_count > self._max_retries:
            return None
        return backoff_delay(self.failure_count, base=self._backoff_base, cap=self._backoff_cap)

    async def refresh(self) -> RefreshOutcome:
        """Fetch the feed once and update the cache from it."""

        self.touch()
        try:
            records = await self._feed.fetch_latest()
        except SourceFeedError as exc:
            return self._record_failure(str(exc))

        mapping = build_mapping(records)
        if not self.replace(mapping):
            logger.warning("Received empty stream sources list - keeping existing cache")
            return RefreshOutcome(result=RefreshResult.EMPTY)

        self.failure_count = 0
        self._last_error = None
        self._last_success_at = datetime.now(timezone.utc)
        logger.info(f"Updated {len(mapping)} stream URLs from the source feed")
        return RefreshOutcome(result=RefreshResult.UPDATED, entries=len(mapping))

    def _record_failure(self, error: str) -> RefreshOutcome:
        self.failure_count += 1
        self._last_error = error
        delay = self.retry_delay()
        if delay is None:
            logger.warning(
                f"Stream source refresh failed ({error}); giving up after {self._max_retries} retries"
            )
        else:
            logger.error(
                f"Stream source refresh failed ({error}); retrying in {delay:g}s "
                f"(attempt {self.failure_count}/{self._max_retries})"
            )
        return RefreshOutcome(result=RefreshResult.FAILED, retry_in=delay, error=error)

    def snapshot(self, now: float | None = None) -> CacheSnapshot:
        current = self._clock() if now is None else now
        age = None if self._last_refresh is None else current - self._last_refresh
        return CacheSnapshot(
            size=len(self._entries),
            stale=self.is_stale(current),
            failure_count=self.failure_count,
            last_refresh_age=age,
            last_success_at=self._last_success_at,
            last_error=self._last_error,
        )
