"""Per-league stream id ranges and the normalizers that migrate legacy ids.

The vendor has re-issued team stream ids more than once. Old links are still
bookmarked by viewers and cached by clients, so every resolved URL runs
through these normalizers to move legacy ids onto the current range.

The chain in :func:`normalize_all` is applied to every URL regardless of the
league that issued it. MLB's legacy range 6-30 overlaps the NHL canonical
range 6-35, so an untagged NHL id such as 20 is shifted to 199 as well. Use
:func:`normalize_for_league` when the caller knows the league.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from .stream_ids import extract_stream_id, replace_stream_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LegacyIdRange:
    """A superseded id interval and the offset that maps it onto the current range."""

    low: int
    high: int
    offset: int

    def __contains__(self, stream_id: int) -> bool:
        return self.low <= stream_id <= self.high


@dataclass(frozen=True, slots=True)
class LeagueIdRange:
    """Canonical id interval for a league plus any legacy intervals."""

    league: str
    low: int
    high: int
    legacy: tuple[LegacyIdRange, ...] = field(default_factory=tuple)

    def __contains__(self, stream_id: int) -> bool:
        return self.low <= stream_id <= self.high

    def canonical_id(self, stream_id: int) -> int:
        """Return the current id for ``stream_id``, unchanged when no legacy range applies."""

        if stream_id in self:
            return stream_id
        for legacy_range in self.legacy:
            if stream_id in legacy_range:
                return stream_id + legacy_range.offset
        return stream_id

    def normalize(self, url: str) -> str:
        """Rewrite a legacy id in ``url`` to this league's canonical range."""

        stream_id = extract_stream_id(url)
        if stream_id is None:
            return url

        current = int(stream_id)
        canonical = self.canonical_id(current)
        if canonical == current:
            return url

        logger.debug(f"[{self.league.upper()}] Converting legacy stream id {current} to {canonical}")
        return replace_stream_id(url, canonical)


NHL = LeagueIdRange("nhl", 6, 35)
NFL = LeagueIdRange("nfl", 36, 65)
NBA = LeagueIdRange("nba", 98, 127)
MLB = LeagueIdRange(
    "mlb",
    185,
    214,
    legacy=(
        LegacyIdRange(6, 30, 179),
        LegacyIdRange(148, 177, 37),
    ),
)

LEAGUE_RANGES: dict[str, LeagueIdRange] = {
    league_range.league: league_range for league_range in (NHL, NFL, NBA, MLB)
}


def normalize_mlb(url: str) -> str:
    return MLB.normalize(url)


def normalize_nhl(url: str) -> str:
    return NHL.normalize(url)


def normalize_nfl(url: str) -> str:
    return NFL.normalize(url)


def normalize_nba(url: str) -> str:
    return NBA.normalize(url)


NORMALIZER_CHAIN: tuple[Callable[[str], str], ...] = (
    normalize_mlb,
    normalize_nhl,
    normalize_nfl,
    normalize_nba,
)


def normalize_all(url: str) -> str:
    """Apply every league normalizer to ``url``."""

    if not url:
        return url
    for normalizer in NORMALIZER_CHAIN:
        url = normalizer(url)
    return url


def normalize_for_league(url: str, league: str) -> str:
    """Apply only the normalizer for ``league``; unknown leagues leave ``url`` unchanged."""

    league_range = LEAGUE_RANGES.get(league.lower()) if league else None
    if league_range is None or not url:
        return url
    return league_range.normalize(url)


def league_for_id(stream_id: int | str | None) -> str | None:
    """Return the league whose canonical range contains ``stream_id``."""

    if stream_id is None:
        return None
    try:
        value = int(stream_id)
    except (TypeError, ValueError):
        return None
    for league_range in LEAGUE_RANGES.values():
        if value in league_range:
            return league_range.league
    return None
