"""Discovery trigger payload and its validation errors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_MAX_SONGS = 20


class DiscoveryError(RuntimeError):
    """Base class for pipeline-level discovery failures."""


class InvalidDiscoveryRequestError(DiscoveryError, ValueError):
    """Raised when a trigger payload is missing required fields or has bad values."""


class DiscoveryRequestNotFoundError(DiscoveryError):
    """Raised when the referenced discovery request does not exist for the user."""

    def __init__(self, request_id: UUID) -> None:
        super().__init__(f"Discovery request {request_id} not found")
        self.request_id = request_id


@dataclass(frozen=True, slots=True)
class DiscoveryTrigger:
    request_id: UUID
    songwriter_name: str
    user_id: UUID
    max_songs: int = DEFAULT_MAX_SONGS

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> DiscoveryTrigger:
        """Parse a camelCase (or snake_case) trigger body."""

        request_id = _field(payload, "requestId", "request_id")
        songwriter_name = _field(payload, "songwriterName", "songwriter_name")
        user_id = _field(payload, "userId", "user_id")
        missing = [
            name
            for name, value in (
                ("requestId", request_id),
                ("songwriterName", songwriter_name),
                ("userId", user_id),
            )
            if value is None or (isinstance(value, str) and not value.strip())
        ]
        if missing:
            raise InvalidDiscoveryRequestError(f"Missing required fields: {', '.join(missing)}")

        if not isinstance(songwriter_name, str):
            raise InvalidDiscoveryRequestError("songwriterName must be a string")

        return cls(
            request_id=_uuid(request_id, "requestId"),
            songwriter_name=songwriter_name.strip(),
            user_id=_uuid(user_id, "userId"),
            max_songs=_max_songs(_field(payload, "maxSongs", "max_songs")),
        )


def _field(payload: Mapping[str, object], camel: str, snake: str) -> object | None:
    value = payload.get(camel)
    if value is None:
        value = payload.get(snake)
    return value


def _uuid(value: object, name: str) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value).strip())
    except ValueError:
        raise InvalidDiscoveryRequestError(f"{name} must be a UUID") from None


def _max_songs(value: object | None) -> int:
    if value is None:
        return DEFAULT_MAX_SONGS
    if isinstance(value, bool):
        raise InvalidDiscoveryRequestError("maxSongs must be a positive integer")
    try:
        max_songs = int(str(value).strip()) if not isinstance(value, int) else value
    except ValueError:
        raise InvalidDiscoveryRequestError("maxSongs must be a positive integer") from None
    if max_songs <= 0:
        raise InvalidDiscoveryRequestError("maxSongs must be a positive integer")
    return max_songs
