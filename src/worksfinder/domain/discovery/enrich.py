"""Per-candidate enrichment into persisted discovery rows."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any

from worksfinder.domain.model import (
    DEFAULT_TERRITORY,
    PERFORMING_RIGHTS_ORGANIZATIONS,
    PRO_PRIORITY,
    DiscoveredWork,
    RegistrationGap,
    VerificationStatus,
    WorkSource,
    normalize_iswc,
)

from .conflicts import detect_conflicts

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from worksfinder.domain.model import (
        Attribution,
        SongwriterIdentity,
        VerificationResult,
        WorkCandidate,
        WorkDetail,
    )
    from worksfinder.domain.ports import BibliographicCatalog, VerificationAgent

log = getLogger(__name__)

COMPLETE_SCORE = 0.9
INCOMPLETE_SCORE = 0.6
UNTITLED = "Untitled"


@dataclass(frozen=True, slots=True)
class EnrichmentContext:
    """Request-level values stamped onto every row of one discovery run."""

    request_id: UUID
    user_id: UUID
    songwriter_name: str
    identity: SongwriterIdentity | None = None
    source_status: dict[str, str] = field(default_factory=dict[str, str])

    @property
    def primary_territory(self) -> str:
        return self.identity.primary_territory if self.identity else DEFAULT_TERRITORY


def choose_pro_source(candidate: WorkCandidate) -> WorkSource | None:
    """First PRO in priority order that reported attribution details for the candidate."""

    for source in PRO_PRIORITY:
        if source in candidate.pro_details:
            return source
    return None


def completeness_score(iswc: str | None) -> float:
    return COMPLETE_SCORE if iswc else INCOMPLETE_SCORE


def final_iswc(
    detail: WorkDetail | None,
    candidate: WorkCandidate,
    verification: VerificationResult | None,
) -> str | None:
    """Catalog detail, then PROs in priority order, then the verification agent.

    The ISWC carried by the candidate itself is the last resort, so a detail
    lookup failure never drops an identifier already seen during merge.
    """

    if detail is not None and detail.iswc:
        return normalize_iswc(detail.iswc)
    for source in PRO_PRIORITY:
        details = candidate.pro_details.get(source)
        if details is not None and details.iswc:
            return normalize_iswc(details.iswc)
    if verification is not None and verification.iswc:
        return normalize_iswc(verification.iswc)
    return candidate.iswc


class WorkEnricher:
    """Turns a selected candidate into a normalized :class:`DiscoveredWork` row."""

    def __init__(
        self,
        *,
        catalog: BibliographicCatalog,
        verification_agent: VerificationAgent | None = None,
    ) -> None:
        self._catalog = catalog
        self._verification_agent = verification_agent

    async def enrich(
        self, candidate: WorkCandidate, *, context: EnrichmentContext
    ) -> DiscoveredWork:
        detail = await self._fetch_detail(candidate)
        title = (detail.title if detail and detail.title.strip() else candidate.title).strip()

        chosen = choose_pro_source(candidate)
        verification: VerificationResult | None = None
        if chosen is None:
            verification = await self._verify(title or candidate.title, context.songwriter_name)

        writers: tuple[Attribution, ...] = ()
        publishers: tuple[Attribution, ...] = ()
        if chosen is not None:
            writers = candidate.pro_details[chosen].writers
            publishers = candidate.pro_details[chosen].publishers
        elif verification is not None:
            writers = verification.writers
            publishers = verification.publishers

        co_writers = _names(writers) or list(detail.writers if detail else ())
        iswc = final_iswc(detail, candidate, verification)
        registrations = _pro_registrations(candidate, verification)

        gaps: list[RegistrationGap] = []
        if not iswc:
            gaps.append(RegistrationGap.MISSING_ISWC)
        if candidate.has_bibliographic_source and candidate.pro_source_count == 0:
            gaps.append(RegistrationGap.UNREGISTERED_IN_PROS)
        gaps.extend(detect_conflicts(candidate.pro_details))

        status = (
            VerificationStatus.PRO_VERIFIED
            if any(registrations.values())
            else VerificationStatus.DISCOVERED
        )
        log.debug("Enriched %r: iswc=%s gaps=%s", title, iswc, [str(gap) for gap in gaps])

        return DiscoveredWork(
            request_id=context.request_id,
            user_id=context.user_id,
            song_title=title or UNTITLED,
            songwriter_name=context.songwriter_name,
            iswc=iswc,
            co_writers=co_writers,
            publishers=_shares(publishers),
            estimated_splits=_shares(writers),
            pro_registrations=registrations,
            registration_gaps=[str(gap) for gap in gaps],
            metadata_completeness_score=completeness_score(iswc),
            verification_status=status,
            source_data=_source_data(candidate, context, chosen, verification),
        )

    async def _fetch_detail(self, candidate: WorkCandidate) -> WorkDetail | None:
        if candidate.external_id is None:
            return None
        try:
            return await self._catalog.fetch_work_detail(candidate.external_id)
        except Exception as exc:  # noqa: BLE001
            log.warning("Work detail lookup failed for %s: %s", candidate.external_id, exc)
            return None

    async def _verify(self, work_title: str, writer_name: str) -> VerificationResult | None:
        if self._verification_agent is None:
            return None
        try:
            return await self._verification_agent.verify(work_title, writer_name)
        except Exception as exc:  # noqa: BLE001
            log.warning("Verification agent failed for %r: %s", work_title, exc)
            return None


def _names(entries: Iterable[Attribution]) -> list[str]:
    names: list[str] = []
    for entry in entries:
        name = entry.name.strip()
        if name and name not in names:
            names.append(name)
    return names


def _shares(entries: Iterable[Attribution]) -> dict[str, float]:
    shares: dict[str, float] = {}
    for entry in entries:
        name = entry.name.strip()
        if name:
            shares.setdefault(name, entry.share if entry.share is not None else 0)
    return shares


def _pro_registrations(
    candidate: WorkCandidate,
    verification: VerificationResult | None,
) -> dict[str, bool]:
    found_by = verification.found_by if verification is not None else {}
    return {
        pro.name: pro.source in candidate.sources or found_by.get(pro.source, False)
        for pro in PERFORMING_RIGHTS_ORGANIZATIONS
    }


def _source_data(
    candidate: WorkCandidate,
    context: EnrichmentContext,
    chosen: WorkSource | None,
    verification: VerificationResult | None,
) -> dict[str, Any]:
    primary = WorkSource.MUSICBRAINZ if candidate.has_bibliographic_source else chosen
    return {
        "source": str(primary) if primary is not None else None,
        "work_id": candidate.external_id,
        "sources": sorted(str(source) for source in candidate.sources),
        "attribution_source": str(chosen) if chosen is not None else None,
        "verification_agent": verification is not None,
        "primary_territory": context.primary_territory,
        "source_status": dict(context.source_status),
    }
