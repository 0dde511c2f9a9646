"""Catalog discovery pipeline: resolve, collect, merge, rank, enrich, summarize."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from worksfinder.config.discovery import DiscoverySettings

from .collect import (
    SourceResult,
    collect_by_identity,
    collect_by_name_search,
    collect_from_pros,
)
from .enrich import EnrichmentContext, WorkEnricher
from .merge import merge_candidates
from .rank import select_top
from .report import summarize
from .resolve import resolve_identity
from .throttle import throttled

if TYPE_CHECKING:
    from worksfinder.domain.model import DiscoveredWork, SongwriterIdentity, WorkCandidate
    from worksfinder.domain.ports import (
        BibliographicCatalog,
        EncyclopediaService,
        RepertoireExtractor,
        VerificationAgent,
    )

    from .report import DiscoverySummary
    from .trigger import DiscoveryTrigger

log = getLogger(__name__)


@dataclass(slots=True)
class DiscoveryCollaborators:
    """External services the pipeline reads from; only the catalog is mandatory."""

    catalog: BibliographicCatalog
    repertoire: RepertoireExtractor | None = None
    encyclopedia: EncyclopediaService | None = None
    verification_agent: VerificationAgent | None = None


@dataclass(slots=True)
class DiscoveryOutcome:
    identity: SongwriterIdentity | None
    rows: list[DiscoveredWork]
    summary: DiscoverySummary
    source_results: dict[str, SourceResult] = field(default_factory=dict[str, SourceResult])
    candidate_count: int = 0


@dataclass(slots=True)
class CatalogDiscoveryEngine:
    collaborators: DiscoveryCollaborators
    settings: DiscoverySettings = field(default_factory=DiscoverySettings)

    async def discover(self, trigger: DiscoveryTrigger) -> DiscoveryOutcome:
        name = trigger.songwriter_name
        log.info("Starting catalog discovery for %r (max %d songs)", name, trigger.max_songs)

        identity = await resolve_identity(
            name,
            catalog=self.collaborators.catalog,
            encyclopedia=self.collaborators.encyclopedia,
        )

        cap = self.settings.collection_cap(max(trigger.max_songs, self.settings.max_works))
        bibliographic, pro_results = await asyncio.gather(
            self._collect_bibliographic(name, identity, cap),
            collect_from_pros(self.collaborators.repertoire, name, max_works=cap),
        )

        source_results: dict[str, SourceResult] = {bibliographic.source: bibliographic}
        source_results.update({str(source): result for source, result in pro_results.items()})

        candidates = merge_candidates(
            bibliographic.items,
            {source: result.items for source, result in pro_results.items()},
        )
        selected = select_top(candidates.values(), trigger.max_songs)
        log.info("Selected %d of %d candidates for enrichment", len(selected), len(candidates))

        rows = await self._enrich(selected, trigger, identity, source_results)
        summary = summarize(rows, songwriter_name=name, identity=identity)
        log.info(
            "Catalog discovery for %r finished: %d rows, %d%% verified",
            name,
            summary.total_found,
            summary.verification_rate,
        )
        return DiscoveryOutcome(
            identity=identity,
            rows=rows,
            summary=summary,
            source_results=source_results,
            candidate_count=len(candidates),
        )

    async def _collect_bibliographic(
        self,
        name: str,
        identity: SongwriterIdentity | None,
        cap: int,
    ) -> SourceResult:
        catalog = self.collaborators.catalog
        if identity is not None:
            result = await collect_by_identity(catalog, identity, max_works=cap)
            if result.items:
                return result
            log.info("No works linked to artist %s; falling back to name search", identity.id)
        return await collect_by_name_search(catalog, name, max_works=cap)

    async def _enrich(
        self,
        selected: list[WorkCandidate],
        trigger: DiscoveryTrigger,
        identity: SongwriterIdentity | None,
        source_results: dict[str, SourceResult],
    ) -> list[DiscoveredWork]:
        enricher = WorkEnricher(
            catalog=self.collaborators.catalog,
            verification_agent=self.collaborators.verification_agent,
        )
        context = EnrichmentContext(
            request_id=trigger.request_id,
            user_id=trigger.user_id,
            songwriter_name=trigger.songwriter_name,
            identity=identity,
            source_status={
                source: str(result.status) for source, result in source_results.items()
            },
        )
        rows: list[DiscoveredWork] = []
        delay = self.settings.enrich_delay_seconds
        async for candidate in throttled(selected, delay_seconds=delay):
            rows.append(await enricher.enrich(candidate, context=context))
        return rows

