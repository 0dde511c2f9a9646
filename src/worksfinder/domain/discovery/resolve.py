"""Resolve a free-text songwriter name to a catalog identity."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from worksfinder.domain.model import DEFAULT_TERRITORY, SongwriterIdentity, normalize_name

if TYPE_CHECKING:
    from collections.abc import Sequence

    from worksfinder.domain.model import ArtistMatch
    from worksfinder.domain.ports import BibliographicCatalog, EncyclopediaService

log = getLogger(__name__)

ARTIST_SEARCH_LIMIT = 5
ARTIST_TYPES = frozenset({"person", "group"})


def artist_search_query(songwriter_name: str) -> str:
    escaped = songwriter_name.strip().replace("\\", "\\\\").replace('"', '\\"')
    return f'artist:"{escaped}" AND (type:person OR type:group)'


def select_artist(songwriter_name: str, matches: Sequence[ArtistMatch]) -> ArtistMatch | None:
    """Prefer an exact case-insensitive name match, else the search engine's top hit."""

    eligible = [
        match for match in matches if match.type is None or match.type.lower() in ARTIST_TYPES
    ]
    if not eligible:
        return None
    wanted = normalize_name(songwriter_name)
    for match in eligible:
        if normalize_name(match.name) == wanted:
            return match
    return eligible[0]


async def resolve_identity(
    songwriter_name: str,
    *,
    catalog: BibliographicCatalog,
    encyclopedia: EncyclopediaService | None = None,
) -> SongwriterIdentity | None:
    """Return the best artist match with territory and biography, or ``None``.

    An unresolved identity is a normal outcome: callers fall back to name search.
    """

    try:
        matches = await catalog.search_artists(
            artist_search_query(songwriter_name), limit=ARTIST_SEARCH_LIMIT
        )
    except Exception as exc:  # noqa: BLE001
        log.warning("Artist search failed for %r: %s", songwriter_name, exc)
        return None

    match = select_artist(songwriter_name, matches)
    if match is None:
        log.info("No catalog artist found for %r", songwriter_name)
        return None

    territory = DEFAULT_TERRITORY
    summary: str | None = None
    try:
        detail = await catalog.fetch_artist_detail(match.id)
    except Exception as exc:  # noqa: BLE001
        log.warning("Artist detail lookup failed for %s: %s", match.id, exc)
    else:
        territory = detail.territory
        if detail.wikipedia_title and encyclopedia is not None:
            summary = await _fetch_summary(encyclopedia, detail.wikipedia_title)

    log.info("Resolved %r to artist %s (%s)", songwriter_name, match.id, match.name)
    return SongwriterIdentity(
        id=match.id,
        name=match.name,
        primary_territory=territory,
        wikipedia_summary=summary,
    )


async def _fetch_summary(encyclopedia: EncyclopediaService, title: str) -> str | None:
    try:
        return await encyclopedia.fetch_summary(title)
    except Exception as exc:  # noqa: BLE001
        log.warning("Encyclopedia summary failed for %r: %s", title, exc)
        return None
