"""Stream source cache endpoints."""
from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends

from backend.resolver.refresh import RefreshScheduler
from backend.resolver.source_cache import SourceCache

from ..dependencies import get_scheduler, get_source_cache
from ..schemas import CacheStatusModel

router = APIRouter(prefix="/cache", tags=["cache"])


def build_cache_status(cache: SourceCache, scheduler: RefreshScheduler) -> CacheStatusModel:
    return CacheStatusModel.model_validate(
        {**asdict(cache.snapshot()), "refresh_state": scheduler.state.value}
    )


@router.get("", response_model=CacheStatusModel)
def read_cache_status(
    cache: SourceCache = Depends(get_source_cache),
    scheduler: RefreshScheduler = Depends(get_scheduler),
) -> CacheStatusModel:
    """Return the current cache snapshot."""

    return build_cache_status(cache, scheduler)


@router.post("/refresh", response_model=CacheStatusModel)
async def refresh_cache(
    cache: SourceCache = Depends(get_source_cache),
    scheduler: RefreshScheduler = Depends(get_scheduler),
) -> CacheStatusModel:
    """Run a refresh cycle now, including any backoff retries, and report the result."""

    scheduler.trigger()
    await scheduler.join()
    return build_cache_status(cache, scheduler)
