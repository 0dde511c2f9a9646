from __future__ import annotations

import asyncio

import httpx
import pytest

from tests.helpers.http_clients import make_client_factory, resilience_config
from worksfinder.adapters.wikipedia import WikipediaSummaryService
from worksfinder.config.wikipedia import WikipediaConfig

WIKIPEDIA_CONFIG = WikipediaConfig(
    resilience=resilience_config("wikipedia", "https://en.wikipedia.test/api/rest_v1/")
)


def _service(
    response: httpx.Response, requests: list[httpx.Request] | None = None
) -> WikipediaSummaryService:
    return WikipediaSummaryService(
        config=WIKIPEDIA_CONFIG,
        client_factory=make_client_factory(lambda _: response, requests),
    )


def test_fetches_extract_for_encoded_title() -> None:
    requests: list[httpx.Request] = []
    payload = {
        "type": "standard",
        "title": "Jane Writer (songwriter)",
        "displaytitle": "<span>Jane Writer</span>",
        "extract": "  Jane Writer is an American songwriter.  ",
    }
    service = _service(httpx.Response(200, json=payload), requests)

    summary = asyncio.run(service.fetch_summary("Jane Writer (songwriter)"))

    assert summary == "Jane Writer is an American songwriter."
    assert requests[0].url.raw_path == b"/api/rest_v1/page/summary/Jane%20Writer%20%28songwriter%29"


@pytest.mark.parametrize(
    "response",
    [httpx.Response(404, json={"type": "not_found"}), httpx.Response(200, json={"extract": " "})],
)
def test_missing_page_or_extract_is_none(response: httpx.Response) -> None:
    assert asyncio.run(_service(response).fetch_summary("Nobody")) is None


def test_blank_title_skips_request() -> None:
    requests: list[httpx.Request] = []

    assert asyncio.run(_service(httpx.Response(200, json={}), requests).fetch_summary(" ")) is None
    assert requests == []


def test_server_errors_propagate() -> None:
    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(_service(httpx.Response(503, text="down")).fetch_summary("Jane"))
