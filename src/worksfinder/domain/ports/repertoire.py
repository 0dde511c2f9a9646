"""Ports for PRO repertoire extraction and verification."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from worksfinder.domain.model import (
        PerformingRightsOrganization,
        RawWork,
        VerificationResult,
    )


@runtime_checkable
class RepertoireExtractor(Protocol):
    """Extract a writer's public repertoire listing from one PRO."""

    async def extract_repertoire(
        self,
        writer_name: str,
        organization: PerformingRightsOrganization,
    ) -> list[RawWork]: ...


@runtime_checkable
class VerificationAgent(Protocol):
    """Last-resort attribution lookup for a single work."""

    async def verify(self, work_title: str, writer_name: str) -> VerificationResult | None: ...
