"""Catalog discovery pipeline."""

from __future__ import annotations

from .collect import (
    SourceResult,
    collect_by_identity,
    collect_by_name_search,
    collect_from_pro,
    collect_from_pros,
)
from .conflicts import detect_conflicts
from .engine import CatalogDiscoveryEngine, DiscoveryCollaborators, DiscoveryOutcome
from .enrich import EnrichmentContext, WorkEnricher, choose_pro_source, final_iswc
from .merge import merge_candidates
from .rank import select_top
from .report import DiscoverySummary, summarize
from .resolve import resolve_identity
from .service import DiscoveryResponse, handle_discovery, run_discovery
from .throttle import throttled
from .trigger import (
    DiscoveryError,
    DiscoveryRequestNotFoundError,
    DiscoveryTrigger,
    InvalidDiscoveryRequestError,
)

__all__ = [
    "CatalogDiscoveryEngine",
    "DiscoveryCollaborators",
    "DiscoveryError",
    "DiscoveryOutcome",
    "DiscoveryRequestNotFoundError",
    "DiscoveryResponse",
    "DiscoverySummary",
    "DiscoveryTrigger",
    "EnrichmentContext",
    "InvalidDiscoveryRequestError",
    "SourceResult",
    "WorkEnricher",
    "choose_pro_source",
    "collect_by_identity",
    "collect_by_name_search",
    "collect_from_pro",
    "collect_from_pros",
    "detect_conflicts",
    "final_iswc",
    "handle_discovery",
    "merge_candidates",
    "resolve_identity",
    "run_discovery",
    "select_top",
    "summarize",
    "throttled",
]
