"""Discovery request handling: status transitions, persistence and the response payload."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from logging import getLogger
from typing import TYPE_CHECKING

from .trigger import (
    DiscoveryRequestNotFoundError,
    DiscoveryTrigger,
    InvalidDiscoveryRequestError,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from worksfinder.domain.model import DiscoveryRequest
    from worksfinder.domain.ports import DiscoveryUnitOfWork, UnitOfWorkFactory

    from .engine import CatalogDiscoveryEngine, DiscoveryOutcome

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DiscoveryResponse:
    status_code: int
    success: bool
    discovered: int = 0
    meta_complete: int = 0
    verification_rate: int = 0
    error: str | None = None

    @classmethod
    def completed(cls, outcome: DiscoveryOutcome) -> DiscoveryResponse:
        return cls(
            status_code=HTTPStatus.OK,
            success=True,
            discovered=outcome.summary.total_found,
            meta_complete=outcome.summary.meta_complete_count,
            verification_rate=outcome.summary.verification_rate,
        )

    @classmethod
    def failure(cls, message: str, *, status_code: int) -> DiscoveryResponse:
        return cls(status_code=status_code, success=False, error=message)

    def to_payload(self) -> dict[str, object]:
        if not self.success:
            return {"error": self.error}
        return {
            "success": True,
            "discovered": self.discovered,
            "metaComplete": self.meta_complete,
            "verificationRate": self.verification_rate,
        }


async def run_discovery(
    trigger: DiscoveryTrigger,
    *,
    engine: CatalogDiscoveryEngine,
    unit_of_work_factory: UnitOfWorkFactory,
) -> DiscoveryOutcome:
    """Run the pipeline for an existing request and record its results.

    Rows and the ``completed`` status are committed together; if either write
    fails neither is visible.
    """

    with unit_of_work_factory() as uow:
        request = _load_request(uow, trigger)
        request.mark_processing()
        uow.commit()

    outcome = await engine.discover(trigger)

    with unit_of_work_factory() as uow:
        request = _load_request(uow, trigger)
        for row in outcome.rows:
            uow.repositories.discovered_works.add(row)
        request.mark_completed(
            total_found=outcome.summary.total_found,
            metadata_complete_count=outcome.summary.meta_complete_count,
            summary=outcome.summary.to_record(),
        )
        uow.commit()

    log.info("Request %s completed with %d works", trigger.request_id, len(outcome.rows))
    return outcome


async def handle_discovery(
    payload: Mapping[str, object],
    *,
    engine: CatalogDiscoveryEngine,
    unit_of_work_factory: UnitOfWorkFactory,
) -> DiscoveryResponse:
    """Top-level handler: never raises, maps failures to an error response."""

    try:
        trigger = DiscoveryTrigger.from_payload(payload)
    except InvalidDiscoveryRequestError as exc:
        log.warning("Rejected discovery trigger: %s", exc)
        return DiscoveryResponse.failure(str(exc), status_code=HTTPStatus.BAD_REQUEST)

    try:
        outcome = await run_discovery(
            trigger, engine=engine, unit_of_work_factory=unit_of_work_factory
        )
    except DiscoveryRequestNotFoundError as exc:
        log.warning("%s", exc)
        return DiscoveryResponse.failure(str(exc), status_code=HTTPStatus.NOT_FOUND)
    except Exception as exc:
        log.exception("Catalog discovery failed for request %s", trigger.request_id)
        message = str(exc) or "Unexpected error"
        _mark_failed(trigger, message, unit_of_work_factory)
        return DiscoveryResponse.failure(message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR)

    return DiscoveryResponse.completed(outcome)


def _load_request(uow: DiscoveryUnitOfWork, trigger: DiscoveryTrigger) -> DiscoveryRequest:
    request = uow.repositories.requests.get(trigger.request_id, user_id=trigger.user_id)
    if request is None:
        raise DiscoveryRequestNotFoundError(trigger.request_id)
    return request


def _mark_failed(
    trigger: DiscoveryTrigger,
    message: str,
    unit_of_work_factory: UnitOfWorkFactory,
) -> None:
    try:
        with unit_of_work_factory() as uow:
            request = uow.repositories.requests.get(trigger.request_id, user_id=trigger.user_id)
            if request is None:
                return
            request.mark_failed(message)
            uow.commit()
    except Exception:
        log.exception("Could not mark request %s as failed", trigger.request_id)
