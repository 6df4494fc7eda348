"""Domain migration helpers for vendor stream URLs."""
from __future__ import annotations

from .constants import CURRENT_DOMAIN, LEGACY_DOMAIN
from .stream_ids import build_stream_url, extract_stream_id


def fallback_for(url: str | None) -> str | None:
    """Return ``url`` on the alternate vendor domain, or ``None`` when no alternate exists."""

    if not url:
        return None
    if CURRENT_DOMAIN in url:
        return url.replace(CURRENT_DOMAIN, LEGACY_DOMAIN)
    if LEGACY_DOMAIN in url:
        return url.replace(LEGACY_DOMAIN, CURRENT_DOMAIN)
    return None


def standardize_domain(url: str) -> str:
    """Rebuild a vendor URL on the current domain, keeping its stream id."""

    stream_id = extract_stream_id(url)
    if stream_id is None:
        return url
    return build_stream_url(stream_id)


def to_current_domain(url: str) -> str:
    """Move a legacy-domain URL onto the current domain, leaving the rest as is."""

    if url and CURRENT_DOMAIN not in url and LEGACY_DOMAIN in url:
        return url.replace(LEGACY_DOMAIN, CURRENT_DOMAIN)
    return url
