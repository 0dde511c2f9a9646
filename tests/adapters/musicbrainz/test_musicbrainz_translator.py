from __future__ import annotations

from worksfinder.adapters.musicbrainz.schema import (
    MusicBrainzArtist,
    MusicBrainzRelation,
    MusicBrainzWork,
    MusicBrainzWorkList,
)
from worksfinder.adapters.musicbrainz.translator import (
    translate_artist_detail,
    translate_work,
    translate_work_detail,
    translate_work_page,
    wikipedia_title,
    writer_names,
)

MusicBrainzPayload = dict[str, object]


def _url_relation(kind: str, resource: str) -> MusicBrainzRelation:
    return MusicBrainzRelation.model_validate(
        {"type": kind, "target-type": "url", "url": {"resource": resource}}
    )


def test_work_translation_keeps_first_non_blank_iswc() -> None:
    work = MusicBrainzWork.model_validate({"id": "w1", "title": "Blue Sky", "iswcs": [" ", "T-1"]})

    raw = translate_work(work)

    assert raw.external_id == "w1"
    assert raw.title == "Blue Sky"
    assert raw.iswc == "T-1"
    assert raw.writers == ()


def test_work_detail_collects_writer_credits_once(work_payload: MusicBrainzPayload) -> None:
    detail = translate_work_detail(MusicBrainzWork.model_validate(work_payload))

    assert detail.title == "Blue Sky"
    assert detail.iswcs == ("T-123.456.789-0", "T-000.000.001-1")
    assert detail.writers == ("Jane Writer", "Bob Cowriter")


def test_writer_names_ignore_non_writer_relations() -> None:
    relations = [
        MusicBrainzRelation.model_validate(
            {"type": "arranger", "artist": {"id": "x", "name": "Arranger"}}
        ),
        MusicBrainzRelation.model_validate(
            {"type": "Composer", "artist": {"id": "y", "name": " Composer "}}
        ),
        MusicBrainzRelation.model_validate({"type": "writer"}),
    ]

    assert writer_names(relations) == ("Composer",)


def test_browse_and_search_pages_report_their_totals(browse_payload: MusicBrainzPayload) -> None:
    browse = translate_work_page(MusicBrainzWorkList.model_validate(browse_payload))
    search = translate_work_page(MusicBrainzWorkList.model_validate({"count": 7, "works": []}))
    unknown = translate_work_page(MusicBrainzWorkList.model_validate({"works": []}))

    assert browse.total == 42
    assert len(browse.works) == 2
    assert search.total == 7
    assert unknown.total is None


def test_artist_detail_translation(artist_payload: MusicBrainzPayload) -> None:
    detail = translate_artist_detail(MusicBrainzArtist.model_validate(artist_payload))

    assert detail.area == "United States"
    assert detail.country == "US"
    assert detail.wikipedia_title == "Jane_Writer (songwriter)"


def test_artist_without_area_falls_back_to_country_then_worldwide() -> None:
    with_country = MusicBrainzArtist.model_validate({"id": "a", "name": "A", "country": "GB"})
    bare = MusicBrainzArtist.model_validate({"id": "b", "name": "B"})

    assert translate_artist_detail(with_country).territory == "GB"
    assert translate_artist_detail(bare).territory == "Worldwide"


def test_wikipedia_title_requires_wikipedia_host() -> None:
    assert wikipedia_title([_url_relation("wikipedia", "https://example.com/wiki/Jane")]) is None
    assert wikipedia_title([_url_relation("wikidata", "https://www.wikidata.org/wiki/Q1")]) is None
    assert (
        wikipedia_title([_url_relation("wikipedia", "https://de.wikipedia.org/wiki/Jane_W%C3%BC/")])
        == "Jane_Wü"
    )
