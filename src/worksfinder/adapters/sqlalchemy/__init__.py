"""SQLAlchemy adapter package for worksfinder."""

from __future__ import annotations

from .mappings import (
    create_all_tables,
    discovered_work_table,
    discovery_request_table,
    mapper_registry,
    start_mappers,
)
from .repositories import (
    SqlAlchemyDiscoveredWorkRepository,
    SqlAlchemyDiscoveryRequestRepository,
)
from .unit_of_work import (
    SqlAlchemyDiscoveryUnitOfWork,
    StartupError,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyDiscoveredWorkRepository",
    "SqlAlchemyDiscoveryRequestRepository",
    "SqlAlchemyDiscoveryUnitOfWork",
    "StartupError",
    "create_all_tables",
    "discovered_work_table",
    "discovery_request_table",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
