"""Pydantic models exposed by the resolver service."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class CacheStatusModel(BaseModel):
    """Snapshot of the stream source cache and its refresh task."""

    size: int = Field(description="Number of stream ids currently cached.")
    stale: bool = Field(description="Whether the cache is older than the staleness window.")
    failure_count: int = Field(description="Consecutive feed failures since the last good refresh.")
    last_refresh_age: float | None = Field(
        default=None, description="Seconds since the last refresh attempt, if any."
    )
    last_success_at: datetime | None = Field(
        default=None, description="Time of the last refresh that replaced the cache."
    )
    last_error: str | None = Field(
        default=None, description="Error reported by the most recent failed refresh."
    )
    refresh_state: Literal["idle", "fetching", "backoff"] = Field(
        default="idle", description="Current state of the background refresh task."
    )


class HealthStatus(BaseModel):
    """Service health payload."""

    status: Literal["ok"] = Field(default="ok")
    version: str = Field(default="0.1.0", description="Semantic version of the API service.")
    cache: CacheStatusModel


class ResolutionModel(BaseModel):
    """Result of resolving a stream URL."""

    original_url: str = Field(description="URL supplied by the caller.")
    url: str = Field(description="URL that should be played.")
    stream_id: str | None = Field(default=None, description="Stream id extracted from the URL.")
    source: Literal["fallback", "cache", "standardized", "passthrough"] = Field(
        description="Which resolution branch produced the URL."
    )


class FallbackModel(BaseModel):
    """Alternate-domain URL for a stream."""

    url: str
    fallback_url: str | None = Field(
        default=None, description="Same stream on the other vendor domain, if any."
    )


class StreamIdModel(BaseModel):
    """Identification details for a stream URL."""

    url: str
    stream_id: str | None = Field(default=None)
    league: str | None = Field(
        default=None, description="League whose canonical id range contains the stream id."
    )
    special_channel: bool = Field(
        default=False, description="Whether the id belongs to a network channel (1-5)."
    )
