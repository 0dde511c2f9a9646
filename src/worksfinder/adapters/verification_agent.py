"""Client for the internal PRO verification agent."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from worksfinder.adapters.http_resilience import ResilientClient, UnexpectedPayloadError
from worksfinder.domain.model import Attribution, VerificationResult, WorkSource

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from types import TracebackType

    from worksfinder.config.http_resilience import ResilienceConfig
    from worksfinder.config.verification import VerificationAgentConfig

log = getLogger(__name__)

SEARCH_PATH = "search"


class VerificationAgentError(RuntimeError):
    """Raised when the verification agent answers with an error or malformed body."""


class AgentAttribution(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    share: float | None = None
    ipi: str | None = None


class AgentSourceResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    source: str
    found: bool = False
    iswc: str | None = None


class AgentSearchResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    found: bool = False
    iswc: str | None = None
    writers: list[AgentAttribution] = Field(default_factory=list["AgentAttribution"])
    publishers: list[AgentAttribution] = Field(default_factory=list["AgentAttribution"])
    sources: list[AgentSourceResult] = Field(default_factory=list["AgentSourceResult"])

    @field_validator("writers", "publishers", mode="before")
    @classmethod
    def _names_as_attributions(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, list):
            return [{"name": item} if isinstance(item, str) else item for item in value]
        return value


class VerificationAgentClient:
    """Asks the verification agent to look one work up across the PRO databases."""

    def __init__(
        self,
        *,
        config: VerificationAgentConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def __aenter__(self) -> VerificationAgentClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def verify(self, work_title: str, writer_name: str) -> VerificationResult | None:
        """Return the agent's attribution, or ``None`` when it found nothing."""

        if self._client is None:
            self._client = self._client_factory(self._resilience)
        body = {"workTitle": work_title, "writerName": writer_name}
        try:
            payload = await self._client.post_json(SEARCH_PATH, json=body)
        except httpx.HTTPStatusError as exc:
            msg = f"Verification agent returned HTTP {exc.response.status_code}"
            raise VerificationAgentError(msg) from exc
        except UnexpectedPayloadError as exc:
            raise VerificationAgentError("Unexpected verification agent payload") from exc

        try:
            response = AgentSearchResponse.model_validate(payload)
        except ValidationError as exc:
            raise VerificationAgentError("Unexpected verification agent payload") from exc

        if not response.found:
            log.debug("Verification agent found nothing for %r", work_title)
            return None
        return translate_agent_response(response)


def translate_agent_response(response: AgentSearchResponse) -> VerificationResult:
    found_by: dict[WorkSource, bool] = {}
    for entry in response.sources:
        try:
            source = WorkSource(entry.source.strip().lower())
        except ValueError:
            log.debug("Ignoring unknown verification source %r", entry.source)
            continue
        if source.is_pro:
            found_by[source] = found_by.get(source, False) or entry.found

    iswc = response.iswc or next((entry.iswc for entry in response.sources if entry.iswc), None)
    return VerificationResult(
        iswc=iswc.strip() if iswc else None,
        writers=_attributions(response.writers),
        publishers=_attributions(response.publishers),
        found_by=found_by,
    )


def _attributions(entries: Iterable[AgentAttribution]) -> tuple[Attribution, ...]:
    return tuple(
        Attribution(name=entry.name, share=entry.share, ipi=entry.ipi) for entry in entries
    )
