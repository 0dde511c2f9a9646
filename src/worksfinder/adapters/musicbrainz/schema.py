"""MusicBrainz response schemas for artist and work lookups."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)

type MBId = str
type CountryCode = str  # ISO 3166-1 + specials, see https://musicbrainz.org/doc/Release/Country


class MusicBrainzBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug(
            "MusicBrainz %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class MBEntityType(StrEnum):
    AREA = "area"
    ARTIST = "artist"
    LABEL = "label"
    PLACE = "place"
    RECORDING = "recording"
    RELEASE = "release"
    RELEASE_GROUP = "release-group"
    SERIES = "series"
    URL = "url"
    WORK = "work"


class MusicBrainzArea(MusicBrainzBaseModel):
    id: MBId
    name: str
    sort_name: str | None = Field(default=None, alias="sort-name")
    disambiguation: str | None = None
    type: str | None = None
    iso_3166_1_codes: list[CountryCode] | None = Field(default=None, alias="iso-3166-1-codes")


class MusicBrainzUrl(MusicBrainzBaseModel):
    id: MBId | None = None
    resource: str


class MusicBrainzRelatedArtist(MusicBrainzBaseModel):
    id: MBId
    name: str
    sort_name: str | None = Field(default=None, alias="sort-name")
    disambiguation: str | None = None
    type: str | None = None


class MusicBrainzRelation(MusicBrainzBaseModel):
    type: str
    type_id: MBId | None = Field(default=None, alias="type-id")
    target_type: MBEntityType | None = Field(default=None, alias="target-type")
    direction: str | None = None
    artist: MusicBrainzRelatedArtist | None = None
    url: MusicBrainzUrl | None = None
    attributes: list[str] = Field(default_factory=list)
    begin: str | None = None
    end: str | None = None
    ended: bool | None = None
    source_credit: str | None = Field(default=None, alias="source-credit")
    target_credit: str | None = Field(default=None, alias="target-credit")


class MusicBrainzTag(MusicBrainzBaseModel):
    name: str
    count: int = 0


class MusicBrainzArtist(MusicBrainzBaseModel):
    id: MBId
    name: str
    sort_name: str | None = Field(default=None, alias="sort-name")
    disambiguation: str | None = None
    country: CountryCode | None = None
    type: str | None = None
    type_id: MBId | None = Field(default=None, alias="type-id")
    score: int | None = Field(default=None, description="search relevance, 0-100")
    area: MusicBrainzArea | None = None
    relations: list[MusicBrainzRelation] = Field(default_factory=list["MusicBrainzRelation"])
    tags: list[MusicBrainzTag] = Field(default_factory=list["MusicBrainzTag"])


class MusicBrainzArtistSearch(MusicBrainzBaseModel):
    created: str | None = None
    count: int = 0
    offset: int = 0
    artists: list[MusicBrainzArtist] = Field(default_factory=list["MusicBrainzArtist"])


class MusicBrainzWork(MusicBrainzBaseModel):
    id: MBId
    title: str
    type: str | None = None
    type_id: MBId | None = Field(default=None, alias="type-id")
    disambiguation: str | None = None
    language: str | None = None
    languages: list[str] = Field(default_factory=list)
    iswcs: list[str] = Field(default_factory=list)
    score: int | None = None
    relations: list[MusicBrainzRelation] = Field(default_factory=list["MusicBrainzRelation"])


class MusicBrainzWorkList(MusicBrainzBaseModel):
    """Browse (``work-count``) and search (``count``) responses share this shape."""

    created: str | None = None
    work_count: int | None = Field(default=None, alias="work-count")
    work_offset: int | None = Field(default=None, alias="work-offset")
    count: int | None = None
    offset: int | None = None
    works: list[MusicBrainzWork] = Field(default_factory=list["MusicBrainzWork"])

    @property
    def total(self) -> int | None:
        return self.work_count if self.work_count is not None else self.count
