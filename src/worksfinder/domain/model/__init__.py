"""Discovery domain model."""

from __future__ import annotations

from .catalog import (
    DEFAULT_TERRITORY,
    ArtistDetail,
    ArtistMatch,
    SongwriterIdentity,
    VerificationResult,
    WorkDetail,
    WorkPage,
)
from .enums import (
    PRO_PRIORITY,
    RegistrationGap,
    RequestStatus,
    SourceStatus,
    VerificationStatus,
    WorkSource,
)
from .organizations import (
    ASCAP,
    BMI,
    PERFORMING_RIGHTS_ORGANIZATIONS,
    SESAC,
    PerformingRightsOrganization,
    organization_for,
)
from .records import DiscoveredWork, DiscoveryRequest
from .works import (
    Attribution,
    ProAttribution,
    RawWork,
    WorkCandidate,
    iswc_key,
    normalize_iswc,
    normalize_name,
    title_key,
    work_key,
)

__all__ = [
    "ASCAP",
    "BMI",
    "DEFAULT_TERRITORY",
    "PERFORMING_RIGHTS_ORGANIZATIONS",
    "PRO_PRIORITY",
    "SESAC",
    "ArtistDetail",
    "ArtistMatch",
    "Attribution",
    "DiscoveredWork",
    "DiscoveryRequest",
    "PerformingRightsOrganization",
    "ProAttribution",
    "RawWork",
    "RegistrationGap",
    "RequestStatus",
    "SongwriterIdentity",
    "SourceStatus",
    "VerificationResult",
    "VerificationStatus",
    "WorkCandidate",
    "WorkDetail",
    "WorkPage",
    "WorkSource",
    "iswc_key",
    "normalize_iswc",
    "normalize_name",
    "title_key",
    "work_key",
]
