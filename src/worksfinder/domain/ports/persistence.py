"""Ports for persisting discovery output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from worksfinder.domain.model import DiscoveredWork, DiscoveryRequest

if TYPE_CHECKING:
    from uuid import UUID


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class DiscoveredWorkRepository(Repository[DiscoveredWork], Protocol):
    """Insert-only store of discovered work rows."""

    def list_for_request(self, request_id: UUID) -> list[DiscoveredWork]: ...


@runtime_checkable
class DiscoveryRequestRepository(Repository[DiscoveryRequest], Protocol):
    """Persistence contract for discovery job records."""

    def get(self, request_id: UUID, *, user_id: UUID) -> DiscoveryRequest | None: ...
