"""End-to-end pipeline runs against in-memory collaborators."""

from __future__ import annotations

import asyncio

import pytest

from tests.helpers.discovery import (
    FakeCatalog,
    FakeEncyclopedia,
    FakeRepertoire,
    artist_match,
    bib_work,
    new_uuid,
    pro_work,
)
from worksfinder.adapters.perplexity import RepertoireExtractionError
from worksfinder.config import DiscoverySettings
from worksfinder.domain.discovery import (
    CatalogDiscoveryEngine,
    DiscoveryCollaborators,
    DiscoveryOutcome,
    DiscoveryTrigger,
)
from worksfinder.domain.discovery.collect import name_search_queries
from worksfinder.domain.model import ArtistDetail, SourceStatus, VerificationStatus, WorkSource

NO_DELAY = DiscoverySettings(enrich_delay_seconds=0)


def _trigger(name: str = "Jane Doe", *, max_songs: int = 20) -> DiscoveryTrigger:
    return DiscoveryTrigger(
        request_id=new_uuid(), songwriter_name=name, user_id=new_uuid(), max_songs=max_songs
    )


def _discover(
    catalog: FakeCatalog,
    repertoire: FakeRepertoire | None = None,
    *,
    trigger: DiscoveryTrigger | None = None,
    encyclopedia: FakeEncyclopedia | None = None,
) -> DiscoveryOutcome:
    engine = CatalogDiscoveryEngine(
        DiscoveryCollaborators(catalog=catalog, repertoire=repertoire, encyclopedia=encyclopedia),
        settings=NO_DELAY,
    )
    return asyncio.run(engine.discover(trigger or _trigger()))


@pytest.fixture
def jane_doe_catalog() -> FakeCatalog:
    return FakeCatalog(
        artists=[artist_match("Jane Doe")],
        works_by_artist=[bib_work("Blue Sky", work_id="w1")],
    )


def test_title_match_merges_bibliographic_and_pro_work(jane_doe_catalog: FakeCatalog) -> None:
    repertoire = FakeRepertoire(
        {
            WorkSource.ASCAP: [
                pro_work("Blue Sky", iswc="T-123", writers=[("Jane Doe", 100.0)])
            ]
        }
    )

    outcome = _discover(jane_doe_catalog, repertoire)

    assert outcome.candidate_count == 1
    (row,) = outcome.rows
    assert row.song_title == "Blue Sky"
    assert row.iswc == "T-123"
    assert row.registration_gaps == []
    assert row.verification_status is VerificationStatus.PRO_VERIFIED
    assert row.source_data["sources"] == ["ascap", "musicbrainz"]
    assert row.estimated_splits == {"Jane Doe": 100.0}
    assert set(outcome.source_results) == {"musicbrainz:artist", "ascap", "bmi", "sesac"}
    assert outcome.source_results["bmi"].status is SourceStatus.EMPTY


def test_iswc_merge_across_titles_flags_split_conflict() -> None:
    catalog = FakeCatalog(
        artists=[artist_match("Jane Doe")],
        works_by_artist=[bib_work("Night Train", work_id="w2", iswc="T-999")],
    )
    repertoire = FakeRepertoire(
        {
            WorkSource.ASCAP: [
                pro_work("Nighttrain", iswc="T-999", writers=[("A", 50.0), ("B", 50.0)])
            ],
            WorkSource.BMI: [
                pro_work("Night Train (Remix)", iswc="T-999", writers=[("A", 60.0), ("B", 40.0)])
            ],
        }
    )

    outcome = _discover(catalog, repertoire)

    assert outcome.candidate_count == 1
    (row,) = outcome.rows
    assert "conflicting_splits" in row.registration_gaps
    assert "conflicting_writers" not in row.registration_gaps
    assert row.estimated_splits == {"A": 50.0, "B": 50.0}


def test_selection_prefers_pro_corroborated_candidates() -> None:
    titles = [f"Song {index}" for index in range(10)]
    catalog = FakeCatalog(
        artists=[artist_match("Jane Doe")],
        works_by_artist=[bib_work(title) for title in titles],
    )
    corroborated = [pro_work(title) for title in titles[7:]]
    repertoire = FakeRepertoire({WorkSource.ASCAP: corroborated, WorkSource.BMI: corroborated})

    outcome = _discover(catalog, repertoire, trigger=_trigger(max_songs=5))

    assert outcome.candidate_count == 10
    assert [row.song_title for row in outcome.rows] == [
        "Song 7",
        "Song 8",
        "Song 9",
        "Song 0",
        "Song 1",
    ]
    assert len(catalog.calls_to("fetch_work_detail")) == 5


def test_unresolved_artist_falls_back_to_name_search_and_completes_empty() -> None:
    catalog = FakeCatalog()

    outcome = _discover(catalog, FakeRepertoire())

    assert outcome.identity is None
    assert catalog.calls_to("browse_works_by_artist") == []
    assert catalog.calls_to("search_works") == list(name_search_queries("Jane Doe"))
    assert outcome.rows == []
    assert outcome.summary.total_found == 0
    assert outcome.summary.verification_rate == 0
    assert outcome.source_results["musicbrainz:search"].status is SourceStatus.EMPTY


def test_artist_without_linked_works_uses_name_search() -> None:
    writer_query = name_search_queries("Jane Doe")[0]
    catalog = FakeCatalog(
        artists=[artist_match("Jane Doe")],
        search_results={writer_query: [bib_work("Found By Search")]},
    )

    outcome = _discover(catalog)

    assert outcome.identity is not None
    assert [row.song_title for row in outcome.rows] == ["Found By Search"]
    assert "musicbrainz:artist" not in outcome.source_results
    assert outcome.source_results["musicbrainz:search"].ok


def test_failed_pro_extraction_contributes_nothing(jane_doe_catalog: FakeCatalog) -> None:
    repertoire = FakeRepertoire(
        {
            WorkSource.ASCAP: RepertoireExtractionError("response is not valid JSON"),
            WorkSource.BMI: [pro_work("Blue Sky", writers=[("Jane Doe", 100.0)])],
        }
    )

    outcome = _discover(jane_doe_catalog, repertoire)

    (row,) = outcome.rows
    assert row.source_data["sources"] == ["bmi", "musicbrainz"]
    assert row.pro_registrations == {"ASCAP": False, "BMI": True, "SESAC": False}
    assert outcome.source_results["ascap"].status is SourceStatus.FAILED
    assert outcome.source_results["ascap"].error == "response is not valid JSON"
    assert row.source_data["source_status"]["ascap"] == "failed"


def test_unavailable_catalog_and_repertoire_still_complete() -> None:
    catalog = FakeCatalog(failing={"search_artists", "search_works"})

    outcome = _discover(catalog, None)

    assert outcome.rows == []
    assert outcome.summary.total_found == 0
    assert outcome.source_results["musicbrainz:search"].status is SourceStatus.FAILED
    assert all(
        outcome.source_results[source].status is SourceStatus.FAILED
        for source in ("ascap", "bmi", "sesac")
    )


def test_identity_territory_and_biography_flow_into_summary() -> None:
    catalog = FakeCatalog(
        artists=[artist_match("Jane Doe")],
        artist_detail=ArtistDetail(id="a", area="Nashville", wikipedia_title="Jane_Doe"),
        works_by_artist=[bib_work("Blue Sky", work_id="w1")],
    )
    encyclopedia = FakeEncyclopedia({"Jane_Doe": "Jane Doe writes songs."})

    outcome = _discover(catalog, encyclopedia=encyclopedia)

    overview = outcome.summary.career_overview
    assert overview.source == "wikipedia"
    assert overview.summary == "Jane Doe writes songs."
    assert outcome.rows[0].source_data["primary_territory"] == "Nashville"
