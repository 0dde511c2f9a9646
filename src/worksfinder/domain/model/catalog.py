"""Narrowed records returned by external collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import WorkSource
from .works import Attribution, RawWork

DEFAULT_TERRITORY = "Worldwide"


@dataclass(frozen=True, slots=True)
class SongwriterIdentity:
    """Resolved bibliographic identity for the requested songwriter."""

    id: str
    name: str
    primary_territory: str = DEFAULT_TERRITORY
    wikipedia_summary: str | None = None


@dataclass(frozen=True, slots=True)
class ArtistMatch:
    id: str
    name: str
    type: str | None = None
    score: int | None = None


@dataclass(frozen=True, slots=True)
class ArtistDetail:
    id: str
    area: str | None = None
    country: str | None = None
    wikipedia_title: str | None = None

    @property
    def territory(self) -> str:
        return self.area or self.country or DEFAULT_TERRITORY


@dataclass(frozen=True, slots=True)
class WorkDetail:
    id: str
    title: str
    iswcs: tuple[str, ...] = ()
    writers: tuple[str, ...] = ()

    @property
    def iswc(self) -> str | None:
        return self.iswcs[0] if self.iswcs else None


@dataclass(frozen=True, slots=True)
class WorkPage:
    works: tuple[RawWork, ...] = ()
    total: int | None = None


@dataclass(frozen=True, slots=True)
class VerificationResult:
    """Aggregated attribution from the internal verification agent."""

    iswc: str | None = None
    writers: tuple[Attribution, ...] = ()
    publishers: tuple[Attribution, ...] = ()
    found_by: dict[WorkSource, bool] = field(default_factory=dict["WorkSource", bool])
