"""Ports for the bibliographic catalog and encyclopedia lookups."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from worksfinder.domain.model import ArtistDetail, ArtistMatch, WorkDetail, WorkPage


@runtime_checkable
class BibliographicCatalog(Protocol):
    """Read-only access to a MusicBrainz-style music metadata catalog.

    Implementations raise on transport or payload errors; callers decide how to degrade.
    """

    async def search_artists(self, query: str, *, limit: int = 5) -> list[ArtistMatch]: ...

    async def browse_works_by_artist(
        self, artist_id: str, *, offset: int = 0, limit: int = 100
    ) -> WorkPage: ...

    async def search_works(self, query: str, *, offset: int = 0, limit: int = 100) -> WorkPage: ...

    async def fetch_work_detail(self, work_id: str) -> WorkDetail: ...

    async def fetch_artist_detail(self, artist_id: str) -> ArtistDetail: ...


@runtime_checkable
class EncyclopediaService(Protocol):
    async def fetch_summary(self, title: str) -> str | None: ...
