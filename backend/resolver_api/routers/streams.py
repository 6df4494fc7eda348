"""Stream URL resolution endpoints."""
from __future__ import annotations

from dataclasses import asdict
from typing import Literal

from fastapi import APIRouter, Depends, Query

from backend.resolver.domains import fallback_for
from backend.resolver.leagues import league_for_id
from backend.resolver.stream_ids import extract_stream_id, is_special_channel
from backend.resolver.stream_resolver import StreamUrlResolver

from ..dependencies import get_resolver
from ..schemas import FallbackModel, ResolutionModel, StreamIdModel

router = APIRouter(prefix="/streams", tags=["streams"])


@router.get("/resolve", response_model=ResolutionModel)
async def resolve_stream(
    url: str = Query(default="", description="Stream URL to resolve. Empty returns the fallback stream."),
    league: Literal["nhl", "nfl", "nba", "mlb"] | None = Query(
        default=None,
        description="Restrict id normalization to a single league.",
    ),
    resolver: StreamUrlResolver = Depends(get_resolver),
) -> ResolutionModel:
    """Return the URL currently serving the requested stream."""

    resolution = resolver.resolve_detailed(url, league=league)
    return ResolutionModel.model_validate(asdict(resolution))


@router.get("/fallback", response_model=FallbackModel)
def stream_fallback(url: str = Query(..., description="Stream URL to switch domains for.")) -> FallbackModel:
    """Return the same stream on the alternate vendor domain."""

    return FallbackModel(url=url, fallback_url=fallback_for(url))


@router.get("/id", response_model=StreamIdModel)
def stream_id(url: str = Query(..., description="Stream URL to inspect.")) -> StreamIdModel:
    """Return the stream id embedded in a vendor URL."""

    extracted = extract_stream_id(url)
    return StreamIdModel(
        url=url,
        stream_id=extracted,
        league=league_for_id(extracted),
        special_channel=is_special_channel(url),
    )
