from __future__ import annotations

import os
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from worksfinder.adapters.sqlalchemy import create_all_tables, start_mappers
from worksfinder.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyDiscoveryUnitOfWork,
    shutdown,
    startup,
)
from worksfinder.domain.model import DiscoveryRequest

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    start_mappers()
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyDiscoveryUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyDiscoveryUnitOfWork:
        return SqlAlchemyDiscoveryUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def stored_request(
    sqlite_unit_of_work: Callable[[], SqlAlchemyDiscoveryUnitOfWork],
    user_id: UUID,
) -> DiscoveryRequest:
    request = DiscoveryRequest(songwriter_name="Jane Writer", user_id=user_id)
    with sqlite_unit_of_work() as uow:
        uow.repositories.requests.add(request)
        uow.commit()
    return request
