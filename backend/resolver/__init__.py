"""
Stream URL resolver package.

Maps vendor m3u8 URLs to the URL that is currently serving the stream,
across domain migrations and league id-range changes, using a cache kept
fresh from the latest-sources feed.
"""

from .domains import fallback_for, standardize_domain
from .leagues import (
    normalize_all,
    normalize_for_league,
    normalize_mlb,
    normalize_nba,
    normalize_nfl,
    normalize_nhl,
)
from .refresh import RefreshScheduler, RefreshState
from .source_cache import SourceCache
from .source_feed import SourceFeedClient, SourceFeedError, SourceRecord
from .stream_ids import build_stream_url, extract_stream_id, is_special_channel
from .stream_resolver import Resolution, StreamUrlResolver

__all__ = [
    "RefreshScheduler",
    "RefreshState",
    "Resolution",
    "SourceCache",
    "SourceFeedClient",
    "SourceFeedError",
    "SourceRecord",
    "StreamUrlResolver",
    "build_stream_url",
    "extract_stream_id",
    "fallback_for",
    "is_special_channel",
    "normalize_all",
    "normalize_for_league",
    "normalize_mlb",
    "normalize_nba",
    "normalize_nfl",
    "normalize_nhl",
    "standardize_domain",
]
