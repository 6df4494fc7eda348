"""Health endpoints."""
from fastapi import APIRouter, Depends

from backend.resolver.refresh import RefreshScheduler
from backend.resolver.source_cache import SourceCache

from ..dependencies import get_scheduler, get_source_cache
from ..schemas import HealthStatus
from .cache import build_cache_status

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthStatus)
def get_health(
    cache: SourceCache = Depends(get_source_cache),
    scheduler: RefreshScheduler = Depends(get_scheduler),
) -> HealthStatus:
    """Return service heartbeat information."""

    return HealthStatus(cache=build_cache_status(cache, scheduler))
