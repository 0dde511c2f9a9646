"""Perplexity chat-completions client."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from worksfinder.adapters.http_resilience import ResilientClient, UnexpectedPayloadError

from .errors import RepertoireExtractionError
from .schema import ChatCompletionRequest, ChatCompletionResponse, ChatMessage

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import TracebackType

    from worksfinder.config.http_resilience import ResilienceConfig
    from worksfinder.config.perplexity import PerplexityConfig

log = getLogger(__name__)

CHAT_COMPLETIONS_PATH = "chat/completions"


class PerplexityClient:
    """Low-level HTTP client for the Perplexity chat-completions endpoint."""

    def __init__(
        self,
        *,
        config: PerplexityConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def __aenter__(self) -> PerplexityClient:
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

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        search_domain_filter: Sequence[str] = (),
    ) -> ChatCompletionResponse:
        request = ChatCompletionRequest(
            model=self._config.model,
            messages=list(messages),
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
            search_domain_filter=list(search_domain_filter),
        )
        if self._client is None:
            self._client = self._client_factory(self._config.resilience)
        try:
            payload = await self._client.post_json(
                CHAT_COMPLETIONS_PATH,
                json=request.model_dump(exclude_none=True),
            )
        except httpx.HTTPStatusError as exc:
            msg = f"Perplexity returned HTTP {exc.response.status_code}"
            raise RepertoireExtractionError(msg) from exc
        except UnexpectedPayloadError as exc:
            raise RepertoireExtractionError("Unexpected Perplexity response payload") from exc

        try:
            return ChatCompletionResponse.model_validate(payload)
        except ValidationError as exc:
            raise RepertoireExtractionError("Unexpected Perplexity response payload") from exc
