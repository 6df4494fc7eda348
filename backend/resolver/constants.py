"""Vendor URL constants shared by the resolver modules."""
from __future__ import annotations

CURRENT_DOMAIN = "vpt.pixelsport.to"
LEGACY_DOMAIN = "vp.pixelsport.to"
STREAM_PORT = 443
STREAM_PATH = "psportsgate/psportsgate100"

# Bumped whenever league id ranges move; sent to the feed as ``v``.
# v2: MLB moved to 148-177. v3: NHL/NFL/NBA ranges. v4: MLB moved to 185-214.
STREAM_MAPPING_VERSION = 4

DEFAULT_FALLBACK_STREAM_URL = "https://live.webcastserver.online/hdstream/embed/86.m3u8"

SPECIAL_CHANNEL_IDS = range(1, 6)
