"""LLM-backed PRO repertoire extraction."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from worksfinder.domain.model import Attribution, RawWork

from .client import PerplexityClient
from .errors import RepertoireExtractionError
from .parsing import parse_repertoire
from .schema import ChatMessage

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from types import TracebackType

    from worksfinder.adapters.http_resilience import ResilientClient
    from worksfinder.config.http_resilience import ResilienceConfig
    from worksfinder.config.perplexity import PerplexityConfig
    from worksfinder.domain.model import PerformingRightsOrganization

    from .schema import RepertoireAttribution, RepertoireWork

log = getLogger(__name__)

SYSTEM_PROMPT = (
    "You extract songwriter repertoire listings from performing rights organization "
    "databases. Respond with STRICT JSON only, no prose and no Markdown, in the form "
    '{"works": [{"title": string, "iswc": string|null, '
    '"writers": [{"name": string, "share": number|null, "ipi": string|null}], '
    '"publishers": [{"name": string, "share": number|null}]}]}. '
    'Return {"works": []} when nothing is found. Never invent ISWCs or shares.'
)


def build_messages(
    writer_name: str, organization: PerformingRightsOrganization
) -> list[ChatMessage]:
    user_prompt = (
        f"List the musical works registered with {organization.name} "
        f"({organization.domain}) that credit the songwriter {writer_name!r}. "
        "Include the ISWC, all credited writers and publishers, and their "
        "shares when the repertoire listing shows them."
    )
    return [
        ChatMessage(role="system", content=SYSTEM_PROMPT),
        ChatMessage(role="user", content=user_prompt),
    ]


class PerplexityRepertoireExtractor:
    """Asks a web-search-grounded LLM for one PRO's public repertoire listing."""

    def __init__(
        self,
        *,
        config: PerplexityConfig,
        client: PerplexityClient | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._client = client or PerplexityClient(config=config, client_factory=client_factory)

    async def __aenter__(self) -> PerplexityRepertoireExtractor:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def extract_repertoire(
        self,
        writer_name: str,
        organization: PerformingRightsOrganization,
    ) -> list[RawWork]:
        response = await self._client.complete(
            build_messages(writer_name, organization),
            search_domain_filter=(organization.domain,),
        )
        content = response.content
        if not content:
            msg = f"Empty repertoire answer for {organization.name}"
            raise RepertoireExtractionError(msg)
        works = [translate_repertoire_work(work) for work in parse_repertoire(content)]
        log.debug("%s repertoire for %r: %d works", organization.name, writer_name, len(works))
        return works


def translate_repertoire_work(work: RepertoireWork) -> RawWork:
    return RawWork(
        title=work.title,
        iswc=work.iswc,
        writers=_attributions(work.writers),
        publishers=_attributions(work.publishers),
    )


def _attributions(entries: Iterable[RepertoireAttribution]) -> tuple[Attribution, ...]:
    return tuple(
        Attribution(name=entry.name, share=entry.share, ipi=entry.ipi) for entry in entries
    )
