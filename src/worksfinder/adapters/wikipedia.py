"""Wikipedia REST adapter for songwriter biography summaries."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, Field

from worksfinder.adapters.http_resilience import ResilientClient

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from worksfinder.config.http_resilience import ResilienceConfig
    from worksfinder.config.wikipedia import WikipediaConfig

log = getLogger(__name__)


class WikipediaPageSummary(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: str | None = None
    display_title: str | None = Field(default=None, alias="displaytitle")
    extract: str | None = None
    type: str | None = None


class WikipediaSummaryService:
    """Fetches the lead-section extract of an English Wikipedia article."""

    def __init__(
        self,
        *,
        config: WikipediaConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def __aenter__(self) -> WikipediaSummaryService:
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

    async def fetch_summary(self, title: str) -> str | None:
        """Return the article extract, or ``None`` when the page does not exist."""

        if not title.strip():
            return None
        if self._client is None:
            self._client = self._client_factory(self._resilience)
        path = f"page/summary/{quote(title.strip(), safe='')}"
        try:
            payload = await self._client.get_json(path)
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == httpx.codes.NOT_FOUND:
                log.debug("No Wikipedia article for %r", title)
                return None
            raise
        summary = WikipediaPageSummary.model_validate(payload)
        extract = (summary.extract or "").strip()
        return extract or None
