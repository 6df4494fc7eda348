"""Runtime configuration for the resolver service."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from backend.resolver.constants import DEFAULT_FALLBACK_STREAM_URL, STREAM_MAPPING_VERSION


class ResolverSettings(BaseSettings):
    """Environment-aware settings for the stream URL resolver service."""

    feed_base_url: str = Field(
        "http://localhost:5000",
        description="Base URL of the service publishing /api/stream-sources/latest.",
    )
    feed_timeout_seconds: float = Field(
        default=5.0, gt=0, description="Timeout applied to each latest-sources request."
    )
    mapping_version: int = Field(
        default=STREAM_MAPPING_VERSION,
        description="Stream id mapping version sent to the feed as the v query parameter.",
    )
    fallback_stream_url: str = Field(
        default=DEFAULT_FALLBACK_STREAM_URL,
        description="Always-available stream returned when no URL is supplied.",
    )
    staleness_window_seconds: float = Field(
        default=60.0, gt=0, description="Maximum cache age before a refresh is triggered."
    )
    max_retries: int = Field(
        default=3, ge=0, description="Retries scheduled after consecutive feed failures."
    )
    backoff_base_seconds: float = Field(
        default=1.0, gt=0, description="Base delay doubled for each consecutive feed failure."
    )
    backoff_cap_seconds: float = Field(
        default=8.0, gt=0, description="Upper bound for the retry delay."
    )
    log_level: str = Field(default="INFO", description="Root logging level for the service.")

    model_config = SettingsConfigDict(
        env_prefix="SPORTSTREAM_RESOLVER_",
        env_file=".env",
        env_file_encoding="utf-8",
    )
