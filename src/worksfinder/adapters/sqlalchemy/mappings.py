"""SQLAlchemy mapping metadata for discovery requests and discovered works."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from enum import StrEnum
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Dialect,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    TypeDecorator,
    Uuid,
    orm,
)

from worksfinder.domain.model import (
    DiscoveredWork,
    DiscoveryRequest,
    RequestStatus,
    VerificationStatus,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _value_enum(enum_cls: type[StrEnum]) -> Enum:
    return Enum(
        enum_cls,
        native_enum=False,
        values_callable=lambda members: [member.value for member in members],
    )


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

discovery_request_table = Table(
    "discovery_request",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("songwriter_name", String, nullable=False),
    Column("user_id", UUIDColumnType, nullable=False),
    Column("status", _value_enum(RequestStatus), nullable=False),
    Column("total_found", Integer, nullable=False, default=0),
    Column("metadata_complete_count", Integer, nullable=False, default=0),
    Column("summary", JSON, nullable=True),
    Column("last_refreshed_at", UTCDateTime(), nullable=True),
    Index("ix_discovery_request_user_id", "user_id"),
)

discovered_work_table = Table(
    "discovered_work",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "request_id",
        UUIDColumnType,
        ForeignKey("discovery_request.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUIDColumnType, nullable=False),
    Column("song_title", String, nullable=False),
    Column("songwriter_name", String, nullable=False),
    Column("iswc", String(32), nullable=True),
    Column("co_writers", JSON, nullable=False),
    Column("publishers", JSON, nullable=False),
    Column("estimated_splits", JSON, nullable=False),
    Column("pro_registrations", JSON, nullable=False),
    Column("registration_gaps", JSON, nullable=False),
    Column("metadata_completeness_score", Float, nullable=False),
    Column("verification_status", _value_enum(VerificationStatus), nullable=False),
    Column("source_data", JSON, nullable=False),
    Column("last_verified_at", UTCDateTime(), nullable=False),
    Index("ix_discovered_work_request_id", "request_id"),
    Index("ix_discovered_work_iswc", "iswc"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the discovery records."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(DiscoveryRequest, discovery_request_table)
    mapper_registry.map_imperatively(DiscoveredWork, discovered_work_table)

    orm.configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
