"""Domain port definitions for adapters."""

from __future__ import annotations

from .catalog import BibliographicCatalog, EncyclopediaService
from .persistence import DiscoveredWorkRepository, DiscoveryRequestRepository, Repository
from .repertoire import RepertoireExtractor, VerificationAgent
from .unit_of_work import (
    DiscoveryRepositories,
    DiscoveryUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
    UnitOfWorkFactory,
)

__all__ = [
    "BibliographicCatalog",
    "DiscoveredWorkRepository",
    "DiscoveryRepositories",
    "DiscoveryRequestRepository",
    "DiscoveryUnitOfWork",
    "EncyclopediaService",
    "RepertoireExtractor",
    "Repository",
    "RepositoryCollection",
    "UnitOfWork",
    "UnitOfWorkFactory",
    "VerificationAgent",
]
