"""Candidate collectors: one call per source, each degrading to an explicit result."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from worksfinder.domain.model import (
    PERFORMING_RIGHTS_ORGANIZATIONS,
    SourceStatus,
    WorkSource,
    work_key,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from worksfinder.domain.model import (
        PerformingRightsOrganization,
        RawWork,
        SongwriterIdentity,
        WorkPage,
    )
    from worksfinder.domain.ports import BibliographicCatalog, RepertoireExtractor

log = getLogger(__name__)

DEFAULT_PAGE_SIZE = 100
IDENTITY_SOURCE = "musicbrainz:artist"
NAME_SEARCH_SOURCE = "musicbrainz:search"
NAME_SEARCH_FIELDS = ("writer", "artistname", "artist")

type PageFetcher = Callable[[int, int], Awaitable[WorkPage]]


@dataclass(frozen=True, slots=True)
class SourceResult:
    """Outcome of one collector call.

    A ``failed`` result carries the error text; an ``ok`` result may also carry
    one when later pages failed after some works were collected.
    """

    source: str
    status: SourceStatus
    items: tuple[RawWork, ...] = ()
    error: str | None = None

    @classmethod
    def collected(
        cls, source: str, items: Iterable[RawWork], *, error: str | None = None
    ) -> SourceResult:
        works = tuple(items)
        status = SourceStatus.OK if works else SourceStatus.EMPTY
        return cls(source=source, status=status, items=works, error=error)

    @classmethod
    def failed(cls, source: str, error: BaseException | str) -> SourceResult:
        return cls(source=source, status=SourceStatus.FAILED, error=_describe(error))

    @property
    def ok(self) -> bool:
        return self.status is SourceStatus.OK


async def collect_by_identity(
    catalog: BibliographicCatalog,
    identity: SongwriterIdentity,
    *,
    max_works: int,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> SourceResult:
    """Browse every work linked to the resolved artist, up to ``max_works``."""

    async def fetch(offset: int, limit: int) -> WorkPage:
        return await catalog.browse_works_by_artist(identity.id, offset=offset, limit=limit)

    seen: dict[str, RawWork] = {}
    error = await _collect_pages(fetch, seen, cap=max_works, page_size=page_size)
    return _result(IDENTITY_SOURCE, seen, error)


async def collect_by_name_search(
    catalog: BibliographicCatalog,
    songwriter_name: str,
    *,
    max_works: int,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> SourceResult:
    """Full-text search by writer, artist name and artist credit, deduplicated by work id."""

    seen: dict[str, RawWork] = {}
    errors: list[str] = []
    for query in name_search_queries(songwriter_name):

        async def fetch(offset: int, limit: int, query: str = query) -> WorkPage:
            return await catalog.search_works(query, offset=offset, limit=limit)

        error = await _collect_pages(fetch, seen, cap=max_works, page_size=page_size)
        if error is not None:
            errors.append(error)
    return _result(NAME_SEARCH_SOURCE, seen, "; ".join(errors) or None)


def name_search_queries(songwriter_name: str) -> tuple[str, ...]:
    quoted = _quote(songwriter_name)
    return tuple(f"{field}:{quoted}" for field in NAME_SEARCH_FIELDS)


async def collect_from_pro(
    extractor: RepertoireExtractor,
    songwriter_name: str,
    organization: PerformingRightsOrganization,
    *,
    max_works: int,
) -> SourceResult:
    """Extract one PRO's repertoire listing; at most ``max_works * 2`` entries are kept."""

    source = str(organization.source)
    try:
        works = await extractor.extract_repertoire(songwriter_name, organization)
        titled = [work for work in works if work.title.strip()]
    except Exception as exc:  # noqa: BLE001
        log.warning(
            "%s repertoire extraction failed for %r: %s", organization.name, songwriter_name, exc
        )
        return SourceResult.failed(source, exc)

    limited = titled[: max(max_works, 0) * 2]
    log.info("%s repertoire: %d works for %r", organization.name, len(limited), songwriter_name)
    return SourceResult.collected(source, limited)


async def collect_from_pros(
    extractor: RepertoireExtractor | None,
    songwriter_name: str,
    *,
    max_works: int,
    organizations: Iterable[PerformingRightsOrganization] = PERFORMING_RIGHTS_ORGANIZATIONS,
) -> dict[WorkSource, SourceResult]:
    """Run the per-PRO collectors concurrently; one failing PRO never affects the others."""

    targets = tuple(organizations)
    if extractor is None:
        log.info("No repertoire extractor configured; skipping PRO collection")
        return {
            pro.source: SourceResult.failed(str(pro.source), "repertoire extractor not configured")
            for pro in targets
        }

    results = await asyncio.gather(
        *(
            collect_from_pro(extractor, songwriter_name, pro, max_works=max_works)
            for pro in targets
        )
    )
    return {pro.source: result for pro, result in zip(targets, results, strict=True)}


async def _collect_pages(
    fetch: PageFetcher,
    seen: dict[str, RawWork],
    *,
    cap: int,
    page_size: int,
) -> str | None:
    """Page through one query into ``seen``; return the error text if a page failed."""

    added = 0
    offset = 0
    while added < cap:
        limit = min(page_size, cap - added)
        try:
            page = await fetch(offset, limit)
            new_items = _absorb(page.works, seen, room=cap - added)
        except Exception as exc:  # noqa: BLE001
            log.warning("Catalog page at offset %d failed: %s", offset, exc)
            return _describe(exc)

        if not page.works:
            break
        log.debug("Catalog page at offset %d: %d works, %d new", offset, len(page.works), new_items)
        added += new_items
        offset += len(page.works)
        if new_items == 0:
            break
        if page.total is not None and offset >= page.total:
            break
    return None


def _absorb(works: Iterable[RawWork], seen: dict[str, RawWork], *, room: int) -> int:
    added = 0
    for work in works:
        if added >= room:
            break
        key = work.external_id or work_key(work)
        if key in seen:
            continue
        seen[key] = work
        added += 1
    return added


def _result(source: str, seen: dict[str, RawWork], error: str | None) -> SourceResult:
    if error is not None and not seen:
        return SourceResult.failed(source, error)
    return SourceResult.collected(source, seen.values(), error=error)


def _quote(value: str) -> str:
    escaped = value.strip().replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _describe(error: BaseException | str) -> str:
    if isinstance(error, str):
        return error
    return str(error) or type(error).__name__
