"""Translate MusicBrainz payloads into catalog records."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import unquote, urlparse

from worksfinder.domain.model import ArtistDetail, ArtistMatch, RawWork, WorkDetail, WorkPage

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .schema import (
        MusicBrainzArtist,
        MusicBrainzRelation,
        MusicBrainzWork,
        MusicBrainzWorkList,
    )

WRITER_RELATION_TYPES = frozenset({"writer", "composer", "lyricist", "author"})
WIKIPEDIA_RELATION_TYPE = "wikipedia"
WIKIPEDIA_HOST_SUFFIX = "wikipedia.org"


def translate_artist_match(artist: MusicBrainzArtist) -> ArtistMatch:
    return ArtistMatch(id=artist.id, name=artist.name, type=artist.type, score=artist.score)


def translate_artist_detail(artist: MusicBrainzArtist) -> ArtistDetail:
    return ArtistDetail(
        id=artist.id,
        area=artist.area.name if artist.area is not None else None,
        country=artist.country,
        wikipedia_title=wikipedia_title(artist.relations),
    )


def translate_work(work: MusicBrainzWork) -> RawWork:
    return RawWork(
        title=work.title,
        external_id=work.id,
        iswc=_first_iswc(work.iswcs),
    )


def translate_work_page(payload: MusicBrainzWorkList) -> WorkPage:
    return WorkPage(
        works=tuple(translate_work(work) for work in payload.works),
        total=payload.total,
    )


def translate_work_detail(work: MusicBrainzWork) -> WorkDetail:
    return WorkDetail(
        id=work.id,
        title=work.title,
        iswcs=tuple(iswc for iswc in work.iswcs if iswc.strip()),
        writers=writer_names(work.relations),
    )


def writer_names(relations: Iterable[MusicBrainzRelation]) -> tuple[str, ...]:
    """Names of artists credited through writer, composer, lyricist or author relations."""

    names: list[str] = []
    for relation in relations:
        if relation.type.lower() not in WRITER_RELATION_TYPES or relation.artist is None:
            continue
        name = relation.artist.name.strip()
        if name and name not in names:
            names.append(name)
    return tuple(names)


def wikipedia_title(relations: Iterable[MusicBrainzRelation]) -> str | None:
    """Article title from the first ``wikipedia`` URL relation, if any."""

    for relation in relations:
        if relation.type.lower() != WIKIPEDIA_RELATION_TYPE or relation.url is None:
            continue
        parsed = urlparse(relation.url.resource)
        if not parsed.hostname or not parsed.hostname.endswith(WIKIPEDIA_HOST_SUFFIX):
            continue
        segment = parsed.path.rstrip("/").rsplit("/", 1)[-1]
        if segment:
            return unquote(segment)
    return None


def _first_iswc(iswcs: Iterable[str]) -> str | None:
    for iswc in iswcs:
        if iswc.strip():
            return iswc.strip()
    return None
