"""In-memory work records used while collecting and merging candidates."""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import PRO_PRIORITY, WorkSource

ISWC_KEY_PREFIX = "iswc:"
TITLE_KEY_PREFIX = "title:"


@dataclass(frozen=True, slots=True)
class Attribution:
    """A writer or publisher credit; shares are percentages and need not sum to 100."""

    name: str
    share: float | None = None
    ipi: str | None = None

    @property
    def normalized_name(self) -> str:
        return normalize_name(self.name)


@dataclass(frozen=True, slots=True)
class RawWork:
    """One work as reported by a single source."""

    title: str
    external_id: str | None = None
    iswc: str | None = None
    writers: tuple[Attribution, ...] = ()
    publishers: tuple[Attribution, ...] = ()


@dataclass(frozen=True, slots=True)
class ProAttribution:
    """Attribution payload one PRO reported for a candidate."""

    writers: tuple[Attribution, ...] = ()
    publishers: tuple[Attribution, ...] = ()
    iswc: str | None = None

    @classmethod
    def from_raw(cls, work: RawWork) -> ProAttribution:
        return cls(
            writers=work.writers, publishers=work.publishers, iswc=normalize_iswc(work.iswc)
        )


@dataclass(slots=True)
class WorkCandidate:
    """A possibly duplicated work accumulated across sources during merge.

    ``sources`` is never empty and only grows; ``iswc`` is never cleared once set.
    """

    key: str
    title: str
    sources: set[WorkSource] = field(default_factory=set["WorkSource"])
    external_id: str | None = None
    iswc: str | None = None
    pro_details: dict[WorkSource, ProAttribution] = field(
        default_factory=dict["WorkSource", "ProAttribution"]
    )

    def add_source(self, source: WorkSource) -> None:
        self.sources.add(source)

    def backfill_iswc(self, iswc: str | None) -> None:
        if not self.iswc and iswc:
            self.iswc = iswc

    def record_pro_details(self, source: WorkSource, details: ProAttribution) -> None:
        if not source.is_pro:
            raise ValueError(f"{source} is not a performing rights organization")
        self.pro_details[source] = details

    @property
    def pro_sources(self) -> tuple[WorkSource, ...]:
        """PRO sources in priority order."""
        return tuple(source for source in PRO_PRIORITY if source in self.sources)

    @property
    def pro_source_count(self) -> int:
        return len(self.pro_sources)

    @property
    def has_bibliographic_source(self) -> bool:
        return WorkSource.MUSICBRAINZ in self.sources


def normalize_name(name: str) -> str:
    return " ".join(name.split()).casefold()


def normalize_iswc(iswc: str | None) -> str | None:
    if iswc is None:
        return None
    cleaned = iswc.strip().upper()
    return cleaned or None


def title_key(title: str) -> str:
    return f"{TITLE_KEY_PREFIX}{title.strip().lower()}"


def iswc_key(iswc: str) -> str:
    return f"{ISWC_KEY_PREFIX}{iswc}"


def work_key(work: RawWork) -> str:
    """Dedup key: the ISWC when known, else the lowercased title."""

    if work.iswc:
        return iswc_key(work.iswc)
    return title_key(work.title)
