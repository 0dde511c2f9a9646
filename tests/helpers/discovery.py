"""Reusable fakes and builders for discovery tests."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from worksfinder.domain.model import (
    ArtistDetail,
    ArtistMatch,
    Attribution,
    RawWork,
    SongwriterIdentity,
    WorkDetail,
    WorkPage,
    WorkSource,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from worksfinder.domain.model import PerformingRightsOrganization, VerificationResult

ARTIST_ID = "5f4b3e9c-0000-4000-8000-000000000001"


class FakeCatalog:
    """In-memory bibliographic catalog; methods named in ``failing`` raise."""

    def __init__(
        self,
        *,
        artists: Sequence[ArtistMatch] = (),
        artist_detail: ArtistDetail | None = None,
        works_by_artist: Sequence[RawWork] = (),
        search_results: Mapping[str, Sequence[RawWork]] | None = None,
        work_details: Mapping[str, WorkDetail] | None = None,
        failing: Iterable[str] = (),
    ) -> None:
        self.artists = list(artists)
        self.artist_detail = artist_detail
        self.works_by_artist = list(works_by_artist)
        self.search_results = {key: list(value) for key, value in (search_results or {}).items()}
        self.work_details = dict(work_details or {})
        self.failing = set(failing)
        self.calls: list[tuple[str, str]] = []

    def _record(self, method: str, argument: str) -> None:
        self.calls.append((method, argument))
        if method in self.failing:
            raise RuntimeError(f"{method} unavailable")

    def calls_to(self, method: str) -> list[str]:
        return [argument for name, argument in self.calls if name == method]

    async def search_artists(self, query: str, *, limit: int = 5) -> list[ArtistMatch]:
        self._record("search_artists", query)
        return self.artists[:limit]

    async def browse_works_by_artist(
        self, artist_id: str, *, offset: int = 0, limit: int = 100
    ) -> WorkPage:
        self._record("browse_works_by_artist", f"{artist_id}@{offset}")
        page = self.works_by_artist[offset : offset + limit]
        return WorkPage(works=tuple(page), total=len(self.works_by_artist))

    async def search_works(self, query: str, *, offset: int = 0, limit: int = 100) -> WorkPage:
        self._record("search_works", query)
        results = self.search_results.get(query, [])
        return WorkPage(works=tuple(results[offset : offset + limit]), total=len(results))

    async def fetch_work_detail(self, work_id: str) -> WorkDetail:
        self._record("fetch_work_detail", work_id)
        try:
            return self.work_details[work_id]
        except KeyError:
            raise LookupError(work_id) from None

    async def fetch_artist_detail(self, artist_id: str) -> ArtistDetail:
        self._record("fetch_artist_detail", artist_id)
        if self.artist_detail is None:
            raise LookupError(artist_id)
        return self.artist_detail


class FakeRepertoire:
    """Per-PRO canned repertoire; an exception value is raised for that PRO."""

    def __init__(self, works: Mapping[WorkSource, Sequence[RawWork] | Exception] | None = None):
        self.works = dict(works or {})
        self.calls: list[WorkSource] = []

    async def extract_repertoire(
        self,
        writer_name: str,
        organization: PerformingRightsOrganization,
    ) -> list[RawWork]:
        del writer_name
        self.calls.append(organization.source)
        outcome = self.works.get(organization.source, [])
        if isinstance(outcome, Exception):
            raise outcome
        return list(outcome)


class FakeVerificationAgent:
    def __init__(
        self,
        results: Mapping[str, VerificationResult | None] | None = None,
        *,
        error: Exception | None = None,
    ) -> None:
        self.results = dict(results or {})
        self.error = error
        self.calls: list[str] = []

    async def verify(self, work_title: str, writer_name: str) -> VerificationResult | None:
        del writer_name
        self.calls.append(work_title)
        if self.error is not None:
            raise self.error
        return self.results.get(work_title)


class FakeEncyclopedia:
    def __init__(self, summaries: Mapping[str, str] | None = None) -> None:
        self.summaries = dict(summaries or {})
        self.calls: list[str] = []

    async def fetch_summary(self, title: str) -> str | None:
        self.calls.append(title)
        return self.summaries.get(title)


def bib_work(title: str, *, work_id: str | None = None, iswc: str | None = None) -> RawWork:
    return RawWork(title=title, external_id=work_id or f"mb-{title.lower()}", iswc=iswc)


def pro_work(
    title: str,
    *,
    iswc: str | None = None,
    writers: Iterable[tuple[str, float | None]] = (),
    publishers: Iterable[tuple[str, float | None]] = (),
) -> RawWork:
    return RawWork(
        title=title,
        iswc=iswc,
        writers=tuple(Attribution(name=name, share=share) for name, share in writers),
        publishers=tuple(Attribution(name=name, share=share) for name, share in publishers),
    )


def artist_match(name: str, *, artist_id: str = ARTIST_ID, kind: str = "Person") -> ArtistMatch:
    return ArtistMatch(id=artist_id, name=name, type=kind, score=100)


def identity(name: str = "Jane Writer", *, territory: str = "United States") -> SongwriterIdentity:
    return SongwriterIdentity(id=ARTIST_ID, name=name, primary_territory=territory)


def new_uuid() -> UUID:
    return uuid4()
