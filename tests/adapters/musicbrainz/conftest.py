"""Shared fixtures for MusicBrainz adapter tests."""

from __future__ import annotations

import pytest

from tests.helpers.http_clients import resilience_config
from worksfinder.config.musicbrainz import MusicBrainzConfig

MusicBrainzPayload = dict[str, object]

ARTIST_MBID = "8f3e5b7a-1c2d-4e5f-8a9b-0c1d2e3f4a5b"
WORK_MBID = "2b6e1a57-9f0c-4c1e-b8a3-7d4e5f6a7b8c"


@pytest.fixture
def musicbrainz_config() -> MusicBrainzConfig:
    return MusicBrainzConfig(
        resilience=resilience_config(
            "musicbrainz", "https://musicbrainz.test/ws/2/", **{"User-Agent": "worksfinder-tests"}
        )
    )


@pytest.fixture
def artist_payload() -> MusicBrainzPayload:
    return {
        "id": ARTIST_MBID,
        "name": "Jane Writer",
        "sort-name": "Writer, Jane",
        "type": "Person",
        "country": "US",
        "area": {"id": "a1", "name": "United States", "iso-3166-1-codes": ["US"]},
        "life-span": {"begin": "1970", "ended": False},
        "relations": [
            {
                "type": "official homepage",
                "target-type": "url",
                "url": {"id": "u1", "resource": "https://janewriter.example"},
            },
            {
                "type": "wikipedia",
                "target-type": "url",
                "direction": "forward",
                "url": {
                    "id": "u2",
                    "resource": "https://en.wikipedia.org/wiki/Jane_Writer%20(songwriter)",
                },
            },
        ],
        "tags": [{"name": "country", "count": 3}],
    }


@pytest.fixture
def work_payload() -> MusicBrainzPayload:
    return {
        "id": WORK_MBID,
        "title": "Blue Sky",
        "type": "Song",
        "iswcs": ["T-123.456.789-0", "T-000.000.001-1"],
        "languages": ["eng"],
        "attributes": [],
        "relations": [
            {
                "type": "composer",
                "target-type": "artist",
                "direction": "backward",
                "artist": {"id": ARTIST_MBID, "name": "Jane Writer"},
            },
            {
                "type": "lyricist",
                "target-type": "artist",
                "direction": "backward",
                "artist": {"id": ARTIST_MBID, "name": "Jane Writer"},
            },
            {
                "type": "writer",
                "target-type": "artist",
                "direction": "backward",
                "artist": {"id": "b2", "name": "Bob Cowriter"},
            },
            {
                "type": "performance",
                "target-type": "recording",
                "direction": "backward",
            },
        ],
    }


@pytest.fixture
def browse_payload() -> MusicBrainzPayload:
    return {
        "work-count": 42,
        "work-offset": 0,
        "works": [
            {"id": WORK_MBID, "title": "Blue Sky", "iswcs": ["T-123.456.789-0"]},
            {"id": "w-2", "title": "Night Train", "iswcs": []},
        ],
    }
