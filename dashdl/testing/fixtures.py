"""Canned page, player config and manifest documents for tests.

The sample site mirrors a real embed: an event page pointing at a player
config, whose default DASH CDN points at a segmented JSON manifest with
three video variants. Segment payloads are generated deterministically so
their sizes always match the manifest.
"""

import copy
from typing import Any, Dict, List

PAGE_URL = "https://vimeo.example.com/event/4242/embed"
REFERER = "https://www.example.org/live"

# As it appears in the page markup and after entity decoding
CONFIG_URL_ESCAPED = "https://player.example.com/video/4242/config?h=abc123&amp;s=sig%3D9"
CONFIG_URL = "https://player.example.com/video/4242/config?h=abc123&s=sig%3D9"

MANIFEST_URL = "https://skyfire.example.com/exp=1700000000~hmac=ff/4242/sep/video/playlist.json"
CDN_MANIFEST_URL = "https://akamai.example.com/exp=1700000000~hmac=ff/4242/sep/video/playlist.json"

# base_url "../" resolved against MANIFEST_URL
BASE_URL = "https://skyfire.example.com/exp=1700000000~hmac=ff/4242/sep/"

SAMPLE_PAGE_HTML = f"""<!DOCTYPE html>
<html>
<head><title>Live event</title></head>
<body>
  <div class="player" data-config-url="{CONFIG_URL_ESCAPED}" data-fallback-url="/fallback"></div>
  <div class="player secondary" data-config-url="https://player.example.com/other/config"></div>
</body>
</html>
"""

SAMPLE_PLAYER_CONFIG: Dict[str, Any] = {
    "cdn_url": "https://f.example.com",
    "request": {
        "files": {
            "dash": {
                "separate_av": True,
                "default_cdn": "fastly_skyfire",
                "cdns": {
                    "akfire_interconnect_quic": {
                        "url": CDN_MANIFEST_URL,
                        "origin": "gcs",
                        "avc_url": CDN_MANIFEST_URL,
                    },
                    "fastly_skyfire": {
                        "url": MANIFEST_URL,
                        "origin": "gcs",
                        "avc_url": MANIFEST_URL,
                    },
                },
            },
            "hls": {
                "default_cdn": "akfire_interconnect_quic",
                "cdns": {
                    "akfire_interconnect_quic": {"url": "https://hls.example.com/master.m3u8"}
                },
            },
        },
        "referrer": REFERER,
    },
    "video": {"id": 4242, "title": "Live event"},
}

# Unpadded base64 of the init blocks below
INIT_360 = b"moov360p"
INIT_720 = b"moov720p-init"
INIT_720_ALT = b"moov720p-alt"

SAMPLE_MANIFEST: Dict[str, Any] = {
    "clip_id": "a1b2c3",
    "base_url": "../",
    "video": [
        {
            "id": "v360",
            "base_url": "v360/",
            "format": "dash",
            "mime_type": "video/mp4",
            "codecs": "avc1.64001E",
            "bitrate": 650000,
            "avg_bitrate": 600000,
            "duration": 12.5,
            "framerate": 30,
            "width": 640,
            "height": 360,
            "max_segment_duration": 6,
            "init_segment": "bW9vdjM2MHA",
            "segments": [
                {"start": 0, "end": 6, "url": "v360/segment-1.m4s", "size": 1500},
                {"start": 6, "end": 12, "url": "v360/segment-2.m4s", "size": 1400},
                {"start": 12, "end": 12.5, "url": "v360/segment-3.m4s", "size": 300},
            ],
        },
        {
            "id": "v720",
            "base_url": "v720/",
            "format": "dash",
            "mime_type": "video/mp4",
            "codecs": "avc1.64001F",
            "bitrate": 2400000,
            "avg_bitrate": 2200000,
            "duration": 12.5,
            "framerate": 30,
            "width": 1280,
            "height": 720,
            "max_segment_duration": 6,
            "init_segment": "bW9vdjcyMHAtaW5pdA",
            "segments": [
                {"start": 0, "end": 6, "url": "v720/segment-1.m4s", "size": 4096},
                {"start": 6, "end": 12, "url": "v720/segment-2.m4s", "size": 3900},
                {"start": 12, "end": 12.5, "url": "v720/segment-3.m4s", "size": 700},
            ],
        },
        {
            "id": "v720-alt",
            "base_url": "v720-alt/",
            "format": "dash",
            "mime_type": "video/mp4",
            "codecs": "hev1.1.6.L93.B0",
            "bitrate": 1800000,
            "avg_bitrate": 1700000,
            "duration": 12.5,
            "framerate": 30,
            "width": 1280,
            "height": 720,
            "max_segment_duration": 6,
            "init_segment": "bW9vdjcyMHAtYWx0",
            "segments": [
                {"start": 0, "end": 12.5, "url": "v720-alt/segment-1.m4s", "size": 5000},
            ],
        },
    ],
    "audio": [
        {
            "id": "a128",
            "codecs": "mp4a.40.2",
            "bitrate": 128000,
            "init_segment": "AAAA",
            "segments": [{"url": "a128/segment-1.m4s", "size": 200}],
        }
    ],
}


def segment_payload(size: int, seed: int = 0) -> bytes:
    """Deterministic segment body of exactly size bytes."""
    return bytes((seed + i) % 256 for i in range(size))


def sample_manifest() -> Dict[str, Any]:
    """Return a deep copy of SAMPLE_MANIFEST that tests may mutate."""
    return copy.deepcopy(SAMPLE_MANIFEST)


def sample_player_config() -> Dict[str, Any]:
    """Return a deep copy of SAMPLE_PLAYER_CONFIG that tests may mutate."""
    return copy.deepcopy(SAMPLE_PLAYER_CONFIG)


def sample_segment_bodies(variant_id: str) -> List[bytes]:
    """Payloads for every segment of a sample variant, in manifest order."""
    for variant in SAMPLE_MANIFEST["video"]:
        if variant["id"] == variant_id:
            return [
                segment_payload(segment["size"], seed=index)
                for index, segment in enumerate(variant["segments"])
            ]
    raise KeyError(variant_id)
