from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import uuid4

import pytest
from sqlalchemy import create_engine, select

from worksfinder.adapters.sqlalchemy import discovered_work_table, discovery_request_table
from worksfinder.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyDiscoveryUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from worksfinder.domain.model import (
    DiscoveredWork,
    DiscoveryRequest,
    RequestStatus,
    VerificationStatus,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from uuid import UUID

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def _row(request: DiscoveryRequest, title: str, **overrides: object) -> DiscoveredWork:
    return DiscoveredWork(
        request_id=request.id,
        user_id=request.user_id,
        song_title=title,
        songwriter_name=request.songwriter_name,
        **overrides,  # type: ignore[arg-type]
    )


def test_unit_of_work_requires_startup() -> None:
    assert not is_started()
    with pytest.raises(StartupError):
        SqlAlchemyDiscoveryUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b


def test_request_round_trip_is_scoped_to_user(sqlite_engine: Engine, user_id: UUID) -> None:
    startup(engine=sqlite_engine, force=True)
    request = DiscoveryRequest(songwriter_name="Jane Writer", user_id=user_id)

    with SqlAlchemyDiscoveryUnitOfWork() as uow:
        uow.repositories.requests.add(request)
        uow.commit()

    with SqlAlchemyDiscoveryUnitOfWork() as uow:
        loaded = uow.repositories.requests.get(request.id, user_id=user_id)
        other_user = uow.repositories.requests.get(request.id, user_id=uuid4())

    assert loaded is not None
    assert loaded.songwriter_name == "Jane Writer"
    assert loaded.status is RequestStatus.PENDING
    assert other_user is None


def test_rows_and_completion_persist_with_json_payloads(
    sqlite_unit_of_work: Callable[[], SqlAlchemyDiscoveryUnitOfWork],
    stored_request: DiscoveryRequest,
) -> None:
    refreshed = datetime(2024, 5, 1, 12, 30, tzinfo=UTC)
    with sqlite_unit_of_work() as uow:
        request = uow.repositories.requests.get(stored_request.id, user_id=stored_request.user_id)
        assert request is not None
        uow.repositories.discovered_works.add(
            _row(
                request,
                "Night Train",
                iswc="T-999",
                co_writers=["A", "B"],
                estimated_splits={"A": 50.0, "B": 50.0},
                pro_registrations={"ASCAP": True, "BMI": False, "SESAC": False},
                registration_gaps=["conflicting_splits"],
                metadata_completeness_score=0.9,
                verification_status=VerificationStatus.PRO_VERIFIED,
                source_data={"source": "musicbrainz", "sources": ["ascap", "musicbrainz"]},
            )
        )
        uow.repositories.discovered_works.add(_row(request, "Blue Sky"))
        request.mark_completed(
            total_found=2,
            metadata_complete_count=1,
            summary={"source": "deterministic", "discovered": 2},
            now=refreshed,
        )
        uow.commit()

    with sqlite_unit_of_work() as uow:
        rows = uow.repositories.discovered_works.list_for_request(stored_request.id)
        request = uow.repositories.requests.get(stored_request.id, user_id=stored_request.user_id)

    assert [row.song_title for row in rows] == ["Blue Sky", "Night Train"]
    night_train = rows[1]
    assert night_train.estimated_splits == {"A": 50.0, "B": 50.0}
    assert night_train.pro_registrations["ASCAP"] is True
    assert night_train.verification_status is VerificationStatus.PRO_VERIFIED
    assert night_train.last_verified_at.tzinfo is not None
    assert request is not None
    assert request.status is RequestStatus.COMPLETED
    assert request.summary == {"source": "deterministic", "discovered": 2}
    assert request.last_refreshed_at == refreshed


def test_exception_inside_unit_of_work_rolls_back(
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyDiscoveryUnitOfWork],
    stored_request: DiscoveryRequest,
) -> None:
    with pytest.raises(RuntimeError, match="boom"), sqlite_unit_of_work() as uow:
        uow.repositories.discovered_works.add(_row(stored_request, "Lost Song"))
        uow.session.flush()
        raise RuntimeError("boom")

    with sqlite_engine.connect() as connection:
        rows = connection.execute(select(discovered_work_table.c.id)).all()
        statuses = connection.execute(select(discovery_request_table.c.status)).scalars().all()

    assert rows == []
    assert statuses == ["pending"]
