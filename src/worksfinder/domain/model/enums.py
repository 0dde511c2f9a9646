"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class WorkSource(StrEnum):
    """Where a candidate work was seen."""

    MUSICBRAINZ = "musicbrainz"
    ASCAP = "ascap"
    BMI = "bmi"
    SESAC = "sesac"

    @property
    def is_pro(self) -> bool:
        return self is not WorkSource.MUSICBRAINZ


# Attribution precedence when more than one PRO reports a work.
PRO_PRIORITY: Final[tuple[WorkSource, ...]] = (
    WorkSource.ASCAP,
    WorkSource.BMI,
    WorkSource.SESAC,
)


class RequestStatus(StrEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class VerificationStatus(StrEnum):
    DISCOVERED = "discovered"
    PRO_VERIFIED = "pro_verified"


class RegistrationGap(StrEnum):
    MISSING_ISWC = "missing_iswc"
    UNREGISTERED_IN_PROS = "unregistered_in_pros"
    CONFLICTING_WRITERS = "conflicting_writers"
    CONFLICTING_SPLITS = "conflicting_splits"
    CONFLICTING_PUBLISHERS = "conflicting_publishers"


class SourceStatus(StrEnum):
    """Outcome of one collector call."""

    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"
