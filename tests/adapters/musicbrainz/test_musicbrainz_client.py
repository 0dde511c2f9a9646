"""MusicBrainz client and catalog checks against a mocked transport."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from tests.helpers.http_clients import make_client_factory
from worksfinder.adapters.http_resilience import ResilienceConfig, ResilientClient
from worksfinder.adapters.musicbrainz import (
    MusicBrainzAPIError,
    MusicBrainzCatalog,
    MusicBrainzClient,
)
from worksfinder.config.musicbrainz import MusicBrainzConfig
from worksfinder.domain.model import ArtistMatch

MusicBrainzPayload = dict[str, object]


def test_search_artists_sends_query_and_translates_hits(
    musicbrainz_config: MusicBrainzConfig,
    artist_payload: MusicBrainzPayload,
) -> None:
    requests: list[httpx.Request] = []
    search = {"count": 1, "offset": 0, "artists": [{**artist_payload, "score": 100}]}
    factory = make_client_factory(lambda _: httpx.Response(200, json=search), requests)

    async def run() -> list[ArtistMatch]:
        async with MusicBrainzCatalog(config=musicbrainz_config, client_factory=factory) as catalog:
            return await catalog.search_artists('artist:"Jane Writer"', limit=5)

    matches = asyncio.run(run())

    (request,) = requests
    assert request.url.path == "/ws/2/artist"
    assert request.url.params["query"] == 'artist:"Jane Writer"'
    assert request.url.params["limit"] == "5"
    assert request.url.params["fmt"] == "json"
    assert request.headers["User-Agent"] == "worksfinder-tests"
    (match,) = matches
    assert match.id == artist_payload["id"]
    assert match.name == "Jane Writer"
    assert match.type == "Person"
    assert match.score == 100


def test_browse_works_uses_artist_filter_and_reports_total(
    musicbrainz_config: MusicBrainzConfig,
    browse_payload: MusicBrainzPayload,
) -> None:
    requests: list[httpx.Request] = []
    factory = make_client_factory(lambda _: httpx.Response(200, json=browse_payload), requests)
    catalog = MusicBrainzCatalog(config=musicbrainz_config, client_factory=factory)

    page = asyncio.run(catalog.browse_works_by_artist("artist-1", offset=100, limit=50))

    (request,) = requests
    assert request.url.path == "/ws/2/work"
    assert request.url.params["artist"] == "artist-1"
    assert request.url.params["offset"] == "100"
    assert request.url.params["limit"] == "50"
    assert page.total == 42
    assert [(work.title, work.iswc) for work in page.works] == [
        ("Blue Sky", "T-123.456.789-0"),
        ("Night Train", None),
    ]


def test_search_works_reads_search_count(musicbrainz_config: MusicBrainzConfig) -> None:
    payload = {"count": 3, "offset": 0, "works": [{"id": "w1", "title": "Blue Sky", "score": 98}]}
    requests: list[httpx.Request] = []
    factory = make_client_factory(lambda _: httpx.Response(200, json=payload), requests)
    catalog = MusicBrainzCatalog(config=musicbrainz_config, client_factory=factory)

    page = asyncio.run(catalog.search_works('writer:"Jane Writer"'))

    assert requests[0].url.params["query"] == 'writer:"Jane Writer"'
    assert page.total == 3
    assert page.works[0].external_id == "w1"


def test_work_detail_requests_artist_relations(
    musicbrainz_config: MusicBrainzConfig,
    work_payload: MusicBrainzPayload,
) -> None:
    requests: list[httpx.Request] = []
    factory = make_client_factory(lambda _: httpx.Response(200, json=work_payload), requests)
    catalog = MusicBrainzCatalog(config=musicbrainz_config, client_factory=factory)

    detail = asyncio.run(catalog.fetch_work_detail(str(work_payload["id"])))

    assert requests[0].url.path == f"/ws/2/work/{work_payload['id']}"
    assert requests[0].url.params["inc"] == "artist-rels"
    assert detail.iswc == "T-123.456.789-0"
    assert detail.writers == ("Jane Writer", "Bob Cowriter")


def test_artist_detail_extracts_area_and_wikipedia_title(
    musicbrainz_config: MusicBrainzConfig,
    artist_payload: MusicBrainzPayload,
) -> None:
    requests: list[httpx.Request] = []
    factory = make_client_factory(lambda _: httpx.Response(200, json=artist_payload), requests)
    catalog = MusicBrainzCatalog(config=musicbrainz_config, client_factory=factory)

    detail = asyncio.run(catalog.fetch_artist_detail(str(artist_payload["id"])))

    assert requests[0].url.params["inc"] == "url-rels+tags"
    assert detail.area == "United States"
    assert detail.country == "US"
    assert detail.territory == "United States"
    assert detail.wikipedia_title == "Jane_Writer (songwriter)"


def test_client_is_reused_across_calls(
    musicbrainz_config: MusicBrainzConfig,
    browse_payload: MusicBrainzPayload,
) -> None:
    created: list[object] = []
    inner = make_client_factory(lambda _: httpx.Response(200, json=browse_payload))

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = inner(resilience)
        created.append(client)
        return client

    async def run() -> None:
        async with MusicBrainzClient(config=musicbrainz_config, client_factory=factory) as client:
            await client.browse_works(artist_mbid="a")
            await client.browse_works(artist_mbid="a", offset=100)

    asyncio.run(run())

    assert len(created) == 1


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(503, json={"error": "busy"}),
        httpx.Response(200, content=b"<html>maintenance</html>"),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, json={"works": [{"title": "missing id"}]}),
    ],
)
def test_bad_responses_raise_api_error(
    musicbrainz_config: MusicBrainzConfig,
    response: httpx.Response,
) -> None:
    client = MusicBrainzClient(
        config=musicbrainz_config, client_factory=make_client_factory(lambda _: response)
    )

    with pytest.raises(MusicBrainzAPIError):
        asyncio.run(client.browse_works(artist_mbid="a"))
