"""Application factory for the stream URL resolver service."""
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers import cache, health, streams
from .settings import ResolverSettings
from .state import AppState

API_VERSION = "0.1.0"


def create_app(
    settings: ResolverSettings | None = None,
    *,
    feed_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application."""

    resolved_settings = settings or ResolverSettings()
    app_state = AppState(settings=resolved_settings, feed_transport=feed_transport)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        app_state.scheduler.bind(asyncio.get_running_loop())
        try:
            yield
        finally:
            await app_state.aclose()

    app = FastAPI(title="Sportstream Resolver API", version=API_VERSION, lifespan=lifespan)
    app.state.app_state = app_state
    app.state.settings = app_state.settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    for router in (health.router, streams.router, cache.router):
        app.include_router(router)

    return app
