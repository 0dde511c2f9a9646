"""Persisted discovery entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from .enums import RequestStatus, VerificationStatus


def new_id() -> UUID:
    return uuid4()


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(eq=False, kw_only=True)
class DiscoveryRequest:
    """Job record owned by the caller; discovery only moves its status and counts."""

    id: UUID = field(default_factory=new_id)
    songwriter_name: str
    user_id: UUID
    status: RequestStatus = RequestStatus.PENDING
    total_found: int = 0
    metadata_complete_count: int = 0
    summary: dict[str, Any] | None = None
    last_refreshed_at: datetime | None = None

    def mark_processing(self, *, now: datetime | None = None) -> None:
        self.status = RequestStatus.PROCESSING
        self.last_refreshed_at = now or utcnow()

    def mark_completed(
        self,
        *,
        total_found: int,
        metadata_complete_count: int,
        summary: dict[str, Any],
        now: datetime | None = None,
    ) -> None:
        self.status = RequestStatus.COMPLETED
        self.total_found = total_found
        self.metadata_complete_count = metadata_complete_count
        self.summary = summary
        self.last_refreshed_at = now or utcnow()

    def mark_failed(self, message: str, *, now: datetime | None = None) -> None:
        self.status = RequestStatus.FAILED
        self.summary = {"error": message}
        self.last_refreshed_at = now or utcnow()


@dataclass(eq=False, kw_only=True)
class DiscoveredWork:
    """Normalized output row for one selected candidate. Inserted once, never updated here."""

    id: UUID = field(default_factory=new_id)
    request_id: UUID
    user_id: UUID
    song_title: str
    songwriter_name: str
    iswc: str | None = None
    co_writers: list[str] = field(default_factory=list[str])
    publishers: dict[str, float] = field(default_factory=dict[str, float])
    estimated_splits: dict[str, float] = field(default_factory=dict[str, float])
    pro_registrations: dict[str, bool] = field(default_factory=dict[str, bool])
    registration_gaps: list[str] = field(default_factory=list[str])
    metadata_completeness_score: float = 0.0
    verification_status: VerificationStatus = VerificationStatus.DISCOVERED
    source_data: dict[str, Any] = field(default_factory=dict[str, Any])
    last_verified_at: datetime = field(default_factory=utcnow)
