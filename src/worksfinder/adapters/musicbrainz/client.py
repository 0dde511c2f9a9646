"""MusicBrainz API client."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from worksfinder.adapters.http_resilience import ResilientClient, UnexpectedPayloadError

from .schema import (
    MBEntityType,
    MusicBrainzArtist,
    MusicBrainzArtistSearch,
    MusicBrainzWork,
    MusicBrainzWorkList,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from pydantic import BaseModel

    from worksfinder.config.http_resilience import ResilienceConfig
    from worksfinder.config.musicbrainz import MusicBrainzConfig

log = getLogger(__name__)

DEFAULT_WORK_INC = ("artist-rels",)
DEFAULT_ARTIST_INC = ("url-rels", "tags")


class MusicBrainzAPIError(RuntimeError):
    """Raised when the MusicBrainz API returns an unexpected response."""


class MusicBrainzClient:
    """Low-level HTTP client for the MusicBrainz API.

    The underlying ``ResilientClient`` is opened lazily and kept until
    :meth:`aclose`, so the 1 request/second limit holds across calls.
    """

    def __init__(
        self,
        *,
        config: MusicBrainzConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def __aenter__(self) -> MusicBrainzClient:
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

    async def search_artists(
        self,
        *,
        query: str,
        limit: int = 5,
        offset: int = 0,
    ) -> MusicBrainzArtistSearch:
        params = {
            "fmt": "json",
            "query": query,
            "limit": str(limit),
            "offset": str(offset),
        }
        payload = await self._get(str(MBEntityType.ARTIST), params)
        return _validate(MusicBrainzArtistSearch, payload)

    async def fetch_artist(
        self,
        *,
        mbid: str,
        inc: tuple[str, ...] | None = None,
    ) -> MusicBrainzArtist:
        params = _with_inc({"fmt": "json"}, inc if inc is not None else DEFAULT_ARTIST_INC)
        payload = await self._get(f"{MBEntityType.ARTIST}/{mbid}", params)
        return _validate(MusicBrainzArtist, payload)

    async def browse_works(
        self,
        *,
        artist_mbid: str,
        limit: int = 100,
        offset: int = 0,
    ) -> MusicBrainzWorkList:
        params = {
            "fmt": "json",
            "artist": artist_mbid,
            "limit": str(limit),
            "offset": str(offset),
        }
        payload = await self._get(str(MBEntityType.WORK), params)
        return _validate(MusicBrainzWorkList, payload)

    async def search_works(
        self,
        *,
        query: str,
        limit: int = 100,
        offset: int = 0,
    ) -> MusicBrainzWorkList:
        params = {
            "fmt": "json",
            "query": query,
            "limit": str(limit),
            "offset": str(offset),
        }
        payload = await self._get(str(MBEntityType.WORK), params)
        return _validate(MusicBrainzWorkList, payload)

    async def fetch_work(
        self,
        *,
        mbid: str,
        inc: tuple[str, ...] | None = None,
    ) -> MusicBrainzWork:
        params = _with_inc({"fmt": "json"}, inc if inc is not None else DEFAULT_WORK_INC)
        payload = await self._get(f"{MBEntityType.WORK}/{mbid}", params)
        return _validate(MusicBrainzWork, payload)

    async def _get(self, path: str, params: dict[str, str]) -> dict[str, Any]:
        if self._resilience.base_url is None:
            raise MusicBrainzAPIError("Missing MusicBrainz base_url in resilience configuration")
        if self._client is None:
            self._client = self._client_factory(self._resilience)
        log.debug("MusicBrainz GET %s %s", path, params)
        try:
            return await self._client.get_json(path, params=params)
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            msg = f"MusicBrainz returned HTTP {status} for {path}"
            raise MusicBrainzAPIError(msg) from exc
        except UnexpectedPayloadError as exc:
            raise MusicBrainzAPIError("Unexpected MusicBrainz response payload") from exc


def _with_inc(params: dict[str, str], inc: tuple[str, ...]) -> dict[str, str]:
    if inc:
        params["inc"] = "+".join(inc)
    return params


def _validate[TModel: BaseModel](model: type[TModel], payload: dict[str, Any]) -> TModel:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        msg = f"Unexpected MusicBrainz {model.__name__} payload"
        raise MusicBrainzAPIError(msg) from exc
