"""MusicBrainz implementation of the bibliographic catalog port."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .client import MusicBrainzClient
from .translator import (
    translate_artist_detail,
    translate_artist_match,
    translate_work_detail,
    translate_work_page,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from worksfinder.adapters.http_resilience import ResilientClient
    from worksfinder.config.http_resilience import ResilienceConfig
    from worksfinder.config.musicbrainz import MusicBrainzConfig
    from worksfinder.domain.model import ArtistDetail, ArtistMatch, WorkDetail, WorkPage

log = getLogger(__name__)


class MusicBrainzCatalog:
    """Artist and work lookups against the MusicBrainz web service."""

    def __init__(
        self,
        *,
        config: MusicBrainzConfig,
        client: MusicBrainzClient | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._client = client or MusicBrainzClient(config=config, client_factory=client_factory)

    async def __aenter__(self) -> MusicBrainzCatalog:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def search_artists(self, query: str, *, limit: int = 5) -> list[ArtistMatch]:
        payload = await self._client.search_artists(query=query, limit=limit)
        log.debug("MusicBrainz artist search %r returned %d hits", query, len(payload.artists))
        return [translate_artist_match(artist) for artist in payload.artists]

    async def browse_works_by_artist(
        self, artist_id: str, *, offset: int = 0, limit: int = 100
    ) -> WorkPage:
        payload = await self._client.browse_works(artist_mbid=artist_id, limit=limit, offset=offset)
        return translate_work_page(payload)

    async def search_works(self, query: str, *, offset: int = 0, limit: int = 100) -> WorkPage:
        payload = await self._client.search_works(query=query, limit=limit, offset=offset)
        return translate_work_page(payload)

    async def fetch_work_detail(self, work_id: str) -> WorkDetail:
        return translate_work_detail(await self._client.fetch_work(mbid=work_id))

    async def fetch_artist_detail(self, artist_id: str) -> ArtistDetail:
        return translate_artist_detail(await self._client.fetch_artist(mbid=artist_id))
