"""Tests for stream id extraction, domain fallback and league normalizers."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.resolver.constants import CURRENT_DOMAIN, LEGACY_DOMAIN  # noqa: E402
from backend.resolver.domains import fallback_for, standardize_domain, to_current_domain  # noqa: E402
from backend.resolver.leagues import (  # noqa: E402
    league_for_id,
    normalize_all,
    normalize_for_league,
    normalize_mlb,
    normalize_nba,
    normalize_nfl,
    normalize_nhl,
)
from backend.resolver.stream_ids import (  # noqa: E402
    build_stream_url,
    extract_stream_id,
    is_special_channel,
    replace_stream_id,
)


def url_with_id(stream_id: int, domain: str = CURRENT_DOMAIN) -> str:
    return f"https://{domain}:443/psportsgate/psportsgate100/{stream_id}.m3u8"


@pytest.mark.parametrize("domain", [CURRENT_DOMAIN, LEGACY_DOMAIN])
@pytest.mark.parametrize("stream_id", [1, 20, 150, 199, 1234])
def test_extract_stream_id_reads_id_on_both_domains(domain: str, stream_id: int) -> None:
    """The id should be recovered regardless of the vendor domain."""

    assert extract_stream_id(build_stream_url(stream_id, domain=domain)) == str(stream_id)


def test_extract_stream_id_allows_missing_port_and_plain_http() -> None:
    assert extract_stream_id(f"http://{LEGACY_DOMAIN}/psportsgate/psportsgate100/42.m3u8") == "42"


@pytest.mark.parametrize(
    "value",
    [
        "not-a-stream-url",
        "",
        None,
        "https://vpt.pixelsport.to:443/otherpath/12.m3u8",
        "https://vpt.pixelsport.to:443/psportsgate/psportsgate100/abc.m3u8",
        "https://live.webcastserver.online/hdstream/embed/86.m3u8",
    ],
)
def test_extract_stream_id_returns_none_for_non_stream_urls(value: str | None) -> None:
    assert extract_stream_id(value) is None


def test_replace_stream_id_only_touches_the_id_segment() -> None:
    original = url_with_id(20, LEGACY_DOMAIN) + "?token=20"

    assert replace_stream_id(original, 199) == url_with_id(199, LEGACY_DOMAIN) + "?token=20"
    assert replace_stream_id("not-a-stream-url", 5) == "not-a-stream-url"


def test_is_special_channel_covers_network_ids() -> None:
    assert is_special_channel(url_with_id(1))
    assert is_special_channel(url_with_id(5))
    assert not is_special_channel(url_with_id(6))
    assert not is_special_channel("not-a-stream-url")


@pytest.mark.parametrize("domain", [CURRENT_DOMAIN, LEGACY_DOMAIN])
def test_fallback_round_trip_returns_original_url(domain: str) -> None:
    url = url_with_id(187, domain)

    fallback = fallback_for(url)

    assert fallback is not None
    assert fallback != url
    assert fallback_for(fallback) == url


def test_fallback_switches_between_known_domains() -> None:
    assert fallback_for(url_with_id(7, CURRENT_DOMAIN)) == url_with_id(7, LEGACY_DOMAIN)
    assert fallback_for(url_with_id(7, LEGACY_DOMAIN)) == url_with_id(7, CURRENT_DOMAIN)


@pytest.mark.parametrize(
    "value",
    ["https://live.webcastserver.online/hdstream/embed/86.m3u8", "not-a-stream-url", "", None],
)
def test_fallback_is_none_without_a_known_domain(value: str | None) -> None:
    assert fallback_for(value) is None


def test_standardize_domain_rebuilds_vendor_urls() -> None:
    assert standardize_domain(f"http://{LEGACY_DOMAIN}/psportsgate/psportsgate100/9.m3u8") == url_with_id(9)
    assert standardize_domain("https://example.com/video.m3u8") == "https://example.com/video.m3u8"


def test_to_current_domain_leaves_current_urls_alone() -> None:
    assert to_current_domain(url_with_id(3, LEGACY_DOMAIN)) == url_with_id(3)
    assert to_current_domain(url_with_id(3)) == url_with_id(3)


@pytest.mark.parametrize(
    ("legacy_id", "canonical_id"),
    [(6, 185), (20, 199), (30, 209), (148, 185), (150, 187), (177, 214)],
)
def test_mlb_normalizer_moves_legacy_ids(legacy_id: int, canonical_id: int) -> None:
    assert normalize_mlb(url_with_id(legacy_id)) == url_with_id(canonical_id)


@pytest.mark.parametrize("stream_id", [1, 5, 31, 147, 178, 200])
def test_mlb_normalizer_leaves_other_ids_unchanged(stream_id: int) -> None:
    assert normalize_mlb(url_with_id(stream_id)) == url_with_id(stream_id)


@pytest.mark.parametrize("stream_id", range(185, 215))
def test_mlb_normalizer_is_idempotent_on_canonical_ids(stream_id: int) -> None:
    url = url_with_id(stream_id)

    assert normalize_mlb(normalize_mlb(url)) == url


@pytest.mark.parametrize("normalizer", [normalize_nhl, normalize_nfl, normalize_nba])
@pytest.mark.parametrize("stream_id", [1, 20, 50, 110, 150, 300])
def test_validation_only_normalizers_never_rewrite(normalizer, stream_id: int) -> None:
    url = url_with_id(stream_id)

    assert normalizer(url) == url


def test_normalizers_return_non_stream_urls_unchanged() -> None:
    for normalizer in (normalize_mlb, normalize_nhl, normalize_nfl, normalize_nba, normalize_all):
        assert normalizer("not-a-stream-url") == "not-a-stream-url"
    assert normalize_all("") == ""


def test_normalize_all_shifts_overlapping_nhl_ids() -> None:
    """Untagged ids in the shared NHL/MLB-legacy range are treated as MLB."""

    assert normalize_all(url_with_id(20)) == url_with_id(199)


def test_normalize_for_league_only_applies_the_named_league() -> None:
    assert normalize_for_league(url_with_id(20), "nhl") == url_with_id(20)
    assert normalize_for_league(url_with_id(20), "MLB") == url_with_id(199)
    assert normalize_for_league(url_with_id(20), "cricket") == url_with_id(20)


@pytest.mark.parametrize(
    ("stream_id", "league"),
    [(6, "nhl"), (36, "nfl"), (65, "nfl"), (98, "nba"), (185, "mlb"), (214, "mlb"), (3, None), (150, None), ("x", None)],
)
def test_league_for_id_uses_canonical_ranges(stream_id, league: str | None) -> None:
    assert league_for_id(stream_id) == league
