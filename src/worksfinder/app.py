"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from contextlib import AsyncExitStack, asynccontextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from worksfinder.adapters.musicbrainz import MusicBrainzCatalog
from worksfinder.adapters.perplexity import PerplexityRepertoireExtractor
from worksfinder.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyDiscoveryUnitOfWork,
    is_started,
    startup,
)
from worksfinder.adapters.verification_agent import VerificationAgentClient
from worksfinder.adapters.wikipedia import WikipediaSummaryService
from worksfinder.config import (
    MissingConfigurationError,
    get_discovery_settings,
    get_musicbrainz_config,
    get_perplexity_config,
    get_verification_agent_config,
    get_wikipedia_config,
)
from worksfinder.domain.discovery import (
    CatalogDiscoveryEngine,
    DiscoveryCollaborators,
    handle_discovery,
)
from worksfinder.domain.model import DiscoveryRequest

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Mapping
    from uuid import UUID

    from worksfinder.config import DiscoverySettings
    from worksfinder.domain.discovery import DiscoveryResponse
    from worksfinder.domain.ports import UnitOfWorkFactory

log = getLogger(__name__)


def _default_unit_of_work_factory() -> UnitOfWorkFactory:
    if not is_started():
        startup()
    return SqlAlchemyDiscoveryUnitOfWork


@asynccontextmanager
async def open_collaborators() -> AsyncIterator[DiscoveryCollaborators]:
    """Build the configured adapters and close their HTTP clients afterwards.

    MusicBrainz is required; PRO extraction and the verification agent are
    skipped with a log line when their settings are absent.
    """

    async with AsyncExitStack() as stack:
        catalog = await stack.enter_async_context(
            MusicBrainzCatalog(config=get_musicbrainz_config())
        )
        encyclopedia = await stack.enter_async_context(
            WikipediaSummaryService(config=get_wikipedia_config())
        )

        repertoire: PerplexityRepertoireExtractor | None = None
        try:
            perplexity_config = get_perplexity_config()
        except MissingConfigurationError as exc:
            log.warning("PRO repertoire extraction disabled; unset: %s", ", ".join(exc.names))
        else:
            repertoire = await stack.enter_async_context(
                PerplexityRepertoireExtractor(config=perplexity_config)
            )

        verification_agent: VerificationAgentClient | None = None
        agent_config = get_verification_agent_config()
        if agent_config is None:
            log.info("Verification agent not configured")
        else:
            verification_agent = await stack.enter_async_context(
                VerificationAgentClient(config=agent_config)
            )

        yield DiscoveryCollaborators(
            catalog=catalog,
            repertoire=repertoire,
            encyclopedia=encyclopedia,
            verification_agent=verification_agent,
        )


async def discover_catalog(
    payload: Mapping[str, object],
    *,
    collaborators: DiscoveryCollaborators | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    settings: DiscoverySettings | None = None,
) -> DiscoveryResponse:
    """Handle one discovery trigger with the configured adapters."""

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    effective_settings = settings or get_discovery_settings()

    if collaborators is not None:
        engine = CatalogDiscoveryEngine(collaborators=collaborators, settings=effective_settings)
        return await handle_discovery(payload, engine=engine, unit_of_work_factory=effective_uow)

    async with open_collaborators() as opened:
        engine = CatalogDiscoveryEngine(collaborators=opened, settings=effective_settings)
        return await handle_discovery(payload, engine=engine, unit_of_work_factory=effective_uow)


def run_catalog_discovery(
    payload: Mapping[str, object],
    *,
    collaborators: DiscoveryCollaborators | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    settings: DiscoverySettings | None = None,
) -> DiscoveryResponse:
    """Synchronous wrapper around :func:`discover_catalog`."""

    return asyncio.run(
        discover_catalog(
            payload,
            collaborators=collaborators,
            unit_of_work_factory=unit_of_work_factory,
            settings=settings,
        )
    )


def create_discovery_request(
    *,
    songwriter_name: str,
    user_id: UUID,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> DiscoveryRequest:
    """Create a pending discovery request for ``songwriter_name``."""

    name = songwriter_name.strip()
    if not name:
        raise ValueError("Songwriter name must not be empty")

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    request = DiscoveryRequest(songwriter_name=name, user_id=user_id)
    with effective_uow() as uow:
        uow.repositories.requests.add(request)
        uow.commit()
    log.info("Created discovery request %s for %r", request.id, name)
    return request
