"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from worksfinder.adapters.sqlalchemy.mappings import (
    discovered_work_table,
    discovery_request_table,
)
from worksfinder.domain.model import DiscoveredWork, DiscoveryRequest

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.orm import Session


class SqlAlchemyDiscoveryRequestRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: DiscoveryRequest) -> None:
        self.session.add(entity)

    def get(self, request_id: uuid.UUID, *, user_id: uuid.UUID) -> DiscoveryRequest | None:
        stmt = (
            select(DiscoveryRequest)
            .where(discovery_request_table.c.id == request_id)
            .where(discovery_request_table.c.user_id == user_id)
        )
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemyDiscoveredWorkRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: DiscoveredWork) -> None:
        self.session.add(entity)

    def list_for_request(self, request_id: uuid.UUID) -> list[DiscoveredWork]:
        stmt = (
            select(DiscoveredWork)
            .where(discovered_work_table.c.request_id == request_id)
            .order_by(discovered_work_table.c.song_title)
        )
        return list(self.session.execute(stmt).scalars())
