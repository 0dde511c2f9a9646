"""Merge raw works from every source into deduplicated candidates.

Candidates are keyed ``iswc:<ISWC>`` when an ISWC is known at insertion time,
else ``title:<lowercased title>``. Matching is exact on those keys only. A
title-keyed candidate that later gains an ISWC is also reachable through that
ISWC; an ISWC-keyed candidate is never matched by title.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from worksfinder.domain.model import (
    PRO_PRIORITY,
    ProAttribution,
    WorkCandidate,
    WorkSource,
    iswc_key,
    normalize_iswc,
    title_key,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from worksfinder.domain.model import RawWork

log = getLogger(__name__)


class CandidateIndex:
    """Candidates by primary key plus an alias table from backfilled ISWC keys."""

    def __init__(self) -> None:
        self._candidates: dict[str, WorkCandidate] = {}
        self._aliases: dict[str, str] = {}

    def find(self, key: str) -> WorkCandidate | None:
        primary = self._aliases.get(key)
        if primary is None:
            return None
        return self._candidates[primary]

    def insert(self, candidate: WorkCandidate) -> None:
        self._candidates[candidate.key] = candidate
        self.register(candidate)

    def register(self, candidate: WorkCandidate) -> None:
        """Index the candidate's primary key and current ISWC key; existing aliases are kept."""

        for alias in _aliases_for(candidate):
            self._aliases.setdefault(alias, candidate.key)

    def as_dict(self) -> dict[str, WorkCandidate]:
        return dict(self._candidates)


def merge_candidates(
    bibliographic: Iterable[RawWork],
    pro_works: Mapping[WorkSource, Iterable[RawWork]],
) -> dict[str, WorkCandidate]:
    """Seed from the bibliographic works, then fold in each PRO in priority order."""

    unknown = [source for source in pro_works if not source.is_pro]
    if unknown:
        msg = f"Not performing rights organizations: {', '.join(map(str, unknown))}"
        raise ValueError(msg)

    index = CandidateIndex()
    for work in bibliographic:
        if _has_title(work):
            _merge_bibliographic(index, work)
    for source in PRO_PRIORITY:
        for work in pro_works.get(source, ()):
            if _has_title(work):
                _merge_pro(index, source, work)

    candidates = index.as_dict()
    log.info("Merged candidates: %d", len(candidates))
    return candidates


def _merge_bibliographic(index: CandidateIndex, work: RawWork) -> None:
    iswc = normalize_iswc(work.iswc)
    key = iswc_key(iswc) if iswc else title_key(work.title)
    existing = index.find(key)
    if existing is None:
        index.insert(
            WorkCandidate(
                key=key,
                title=work.title.strip(),
                sources={WorkSource.MUSICBRAINZ},
                external_id=work.external_id,
                iswc=iswc,
            )
        )
        return

    existing.add_source(WorkSource.MUSICBRAINZ)
    existing.backfill_iswc(iswc)
    if existing.external_id is None:
        existing.external_id = work.external_id
    index.register(existing)


def _merge_pro(index: CandidateIndex, source: WorkSource, work: RawWork) -> None:
    iswc = normalize_iswc(work.iswc)
    details = ProAttribution.from_raw(work)

    existing = index.find(iswc_key(iswc)) if iswc else None
    if existing is None:
        existing = index.find(title_key(work.title))
        if existing is not None and iswc and existing.iswc and existing.iswc != iswc:
            existing = None

    if existing is None:
        candidate = WorkCandidate(
            key=iswc_key(iswc) if iswc else title_key(work.title),
            title=work.title.strip(),
            sources={source},
            iswc=iswc,
        )
        candidate.record_pro_details(source, details)
        index.insert(candidate)
        return

    existing.add_source(source)
    existing.backfill_iswc(iswc)
    existing.record_pro_details(source, details)
    index.register(existing)


def _aliases_for(candidate: WorkCandidate) -> tuple[str, ...]:
    if candidate.iswc:
        return (candidate.key, iswc_key(candidate.iswc))
    return (candidate.key,)


def _has_title(work: RawWork) -> bool:
    if work.title.strip():
        return True
    log.debug("Skipping untitled work %s", work.external_id or work.iswc)
    return False
