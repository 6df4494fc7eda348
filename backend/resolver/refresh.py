"""Background task that refreshes the source cache and retries with backoff."""
from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable

from .source_cache import RefreshOutcome, RefreshResult, SourceCache

logger = logging.getLogger(__name__)


class RefreshState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    BACKOFF = "backoff"


class RefreshScheduler:
    """Own the refresh-and-retry cycle for a :class:`SourceCache`.

    A cycle fetches the feed, and on failure waits out the cache's backoff
    delay before fetching again, until a fetch succeeds or the cache reports
    that retries are spent. Only one cycle runs at a time; triggers that
    arrive while a cycle is running are folded into it.
    """

    def __init__(
        self,
        cache: SourceCache,
        *,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self._cache = cache
        self._sleep = sleep
        self._loop: asyncio.AbstractEventLoop | None = None
        self._task: asyncio.Task[None] | None = None
        self.state = RefreshState.IDLE
        self.last_outcome: RefreshOutcome | None = None

    def bind(self, loop: asyncio.AbstractEventLoop) -> None:
        """Attach the event loop that runs refresh cycles."""

        self._loop = loop

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def trigger(self) -> bool:
        """Request a refresh cycle without waiting for it.

        Safe to call from the loop thread or from worker threads. Returns
        ``False`` when no event loop is available to run the cycle.
        """

        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                logger.debug("No event loop available; skipping stream source refresh")
                return False
        if loop.is_closed():
            logger.debug("Event loop closed; skipping stream source refresh")
            return False
        loop.call_soon_threadsafe(self._ensure_task, loop)
        return True

    def _ensure_task(self, loop: asyncio.AbstractEventLoop) -> None:
        if self.running:
            return
        self._task = loop.create_task(self.run_cycle())

    async def run_cycle(self) -> None:
        """Fetch until the cache is updated, the feed is empty, or retries run out."""

        while True:
            self.state = RefreshState.FETCHING
            try:
                outcome = await self._cache.refresh()
            except Exception:
                logger.exception("Unexpected error while refreshing stream sources")
                break
            self.last_outcome = outcome

            if outcome.result is not RefreshResult.FAILED or outcome.retry_in is None:
                break

            self.state = RefreshState.BACKOFF
            await self._sleep(outcome.retry_in)

        self.state = RefreshState.IDLE

    async def join(self) -> None:
        """Wait for the current cycle, if any, to finish."""

        # Let call_soon_threadsafe callbacks from trigger() create the task first.
        await asyncio.sleep(0)
        task = self._task
        if task is not None and not task.done():
            await asyncio.shield(task)

    async def stop(self) -> None:
        """Cancel the running cycle at shutdown."""

        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self.state = RefreshState.IDLE
