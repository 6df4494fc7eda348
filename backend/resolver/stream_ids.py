"""Helpers for reading and writing the numeric id embedded in vendor stream URLs."""
from __future__ import annotations

import re

from .constants import CURRENT_DOMAIN, SPECIAL_CHANNEL_IDS, STREAM_PATH, STREAM_PORT

_STREAM_URL_PATTERN = re.compile(
    r"https?://[^/]+:?\d*/" + re.escape(STREAM_PATH) + r"/(\d+)\.m3u8"
)


def extract_stream_id(url: str | None) -> str | None:
    """Return the stream id embedded in ``url`` or ``None`` when it is not a vendor URL."""

    if not url or not isinstance(url, str):
        return None
    match = _STREAM_URL_PATTERN.search(url)
    return match.group(1) if match else None


def build_stream_url(stream_id: int | str, *, domain: str = CURRENT_DOMAIN) -> str:
    """Build the canonical vendor URL for ``stream_id`` on ``domain``."""

    return f"https://{domain}:{STREAM_PORT}/{STREAM_PATH}/{stream_id}.m3u8"


def replace_stream_id(url: str, new_id: int | str) -> str:
    """Swap the id segment of a vendor URL, leaving everything else untouched."""

    match = _STREAM_URL_PATTERN.search(url or "")
    if match is None:
        return url
    start, end = match.span(1)
    return f"{url[:start]}{new_id}{url[end:]}"


def is_special_channel(url: str) -> bool:
    """Network channels (NBA TV, NFL Network, ...) occupy ids 1-5."""

    stream_id = extract_stream_id(url)
    if stream_id is None:
        return False
    return int(stream_id) in SPECIAL_CHANNEL_IDS
