"""FastAPI dependencies for the resolver service."""
from fastapi import Depends, Request

from backend.resolver.refresh import RefreshScheduler
from backend.resolver.source_cache import SourceCache
from backend.resolver.stream_resolver import StreamUrlResolver

from .state import AppState


def get_app_state(request: Request) -> AppState:
    """Resolve the shared application state from the FastAPI request."""
    return request.app.state.app_state


def get_resolver(app_state: AppState = Depends(get_app_state)) -> StreamUrlResolver:
    """Return the stream URL resolver dependency."""
    return app_state.resolver


def get_source_cache(app_state: AppState = Depends(get_app_state)) -> SourceCache:
    return app_state.cache


def get_scheduler(app_state: AppState = Depends(get_app_state)) -> RefreshScheduler:
    return app_state.scheduler
