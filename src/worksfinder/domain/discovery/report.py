"""Aggregate statistics and the human-readable discovery summary."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from worksfinder.domain.model import DEFAULT_TERRITORY, VerificationStatus

if TYPE_CHECKING:
    from collections.abc import Sequence

    from worksfinder.domain.model import DiscoveredWork, SongwriterIdentity

META_COMPLETE_THRESHOLD = 0.7
STRONG_RATE = 50
MODERATE_RATE = 20


@dataclass(frozen=True, slots=True)
class CareerOverview:
    summary: str
    primary_territory: str
    source: str

    def to_record(self) -> dict[str, str]:
        return {
            "summary": self.summary,
            "primary_territory": self.primary_territory,
            "source": self.source,
        }


@dataclass(frozen=True, slots=True)
class DiscoverySummary:
    total_found: int
    meta_complete_count: int
    iswc_count: int
    pro_verified_count: int
    verification_rate: int
    descriptor: str
    text: str
    career_overview: CareerOverview

    def to_record(self) -> dict[str, Any]:
        """Shape persisted into the request record's ``summary`` column."""

        return {
            "source": "deterministic",
            "discovered": self.total_found,
            "career_overview": self.career_overview.to_record(),
            "pipeline_summary": {
                "summary": self.text,
                "counts": {
                    "total": self.total_found,
                    "meta_complete": self.meta_complete_count,
                    "iswc": self.iswc_count,
                    "pro_verified": self.pro_verified_count,
                    "verification_rate": self.verification_rate,
                },
            },
        }


def verification_rate(pro_verified: int, total: int) -> int:
    """Percentage of PRO-verified rows, rounded half up; 0 for an empty run."""

    if total <= 0:
        return 0
    return math.floor(pro_verified / total * 100 + 0.5)


def outlook_descriptor(rate: int) -> str:
    if rate >= STRONG_RATE:
        return "strong"
    if rate >= MODERATE_RATE:
        return "moderate"
    return "modest"


def career_overview(songwriter_name: str, identity: SongwriterIdentity | None) -> CareerOverview:
    if identity is None:
        return CareerOverview(
            summary=f"Songwriter profile for {songwriter_name}.",
            primary_territory=DEFAULT_TERRITORY,
            source="unknown",
        )
    if identity.wikipedia_summary:
        return CareerOverview(
            summary=identity.wikipedia_summary,
            primary_territory=identity.primary_territory,
            source="wikipedia",
        )
    return CareerOverview(
        summary=f"Songwriter profile for {songwriter_name}.",
        primary_territory=identity.primary_territory,
        source="musicbrainz",
    )


def summarize(
    rows: Sequence[DiscoveredWork],
    *,
    songwriter_name: str,
    identity: SongwriterIdentity | None = None,
) -> DiscoverySummary:
    total = len(rows)
    meta_complete = sum(
        1 for row in rows if row.metadata_completeness_score >= META_COMPLETE_THRESHOLD
    )
    with_iswc = sum(1 for row in rows if row.iswc)
    pro_verified = sum(
        1 for row in rows if row.verification_status == VerificationStatus.PRO_VERIFIED
    )
    rate = verification_rate(pro_verified, total)
    descriptor = outlook_descriptor(rate)
    text = (
        f"We discovered {total} songs for {songwriter_name}. "
        f"{meta_complete} have strong metadata and {with_iswc} include ISWC codes. "
        f"Registration checks matched {pro_verified} songs across PROs. "
        f"Based on current data, near-term collections outlook appears {descriptor}."
    )
    return DiscoverySummary(
        total_found=total,
        meta_complete_count=meta_complete,
        iswc_count=with_iswc,
        pro_verified_count=pro_verified,
        verification_rate=rate,
        descriptor=descriptor,
        text=text,
        career_overview=career_overview(songwriter_name, identity),
    )
