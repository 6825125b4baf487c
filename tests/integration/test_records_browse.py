"""Listing, sorting, pagination and search through the HTML pages."""
from sqlalchemy.orm import Session

from record_collection.db import models

PER_PAGE = 23


def _seed_grid(record_factory, count=60):
    labels = ["Atlantic", "Blue Note", "Columbia"]
    for i in range(count):
        record_factory(
            artist=f"Artist {(i * 7) % count:02d}",
            title=f"Title {i:02d}",
            label=labels[i % len(labels)],
            catalog_no=f"CAT-{(i * 13) % count:02d}",
        )


def _ordered(db: Session, *columns):
    return db.query(models.Record).order_by(*columns, models.Record.id).all()


def test_index_shows_search_form(client, record_factory):
    record_factory("Sun Ra", "Lanquidity", "Philly Jazz", "PJ-666")
    r = client.get("/records")
    assert r.status_code == 200
    assert "Search" in r.text
    assert "Search By" in r.text
    assert "Artist" in r.text
    assert "Lanquidity" in r.text


def test_root_redirects_to_records(client):
    r = client.get("/", follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/records"


def test_pagination_default_sort(client, db_session, record_factory):
    _seed_grid(record_factory)
    R = models.Record
    ordered = _ordered(db_session, R.label, R.artist, R.title)

    r = client.get("/records?page=2")
    assert r.status_code == 200
    on_page = ordered[PER_PAGE:PER_PAGE * 2]
    assert on_page[2].title in r.text
    assert on_page[2].artist in r.text
    assert ordered[0].title not in r.text
    assert ordered[-1].title not in r.text


def test_pagination_sorted_by_artist(client, db_session, record_factory):
    _seed_grid(record_factory)
    R = models.Record
    ordered = _ordered(db_session, R.artist, R.label, R.title)

    r = client.get("/records?sort=artist&page=3")
    assert r.status_code == 200
    last_page = ordered[PER_PAGE * 2:]
    for record in last_page:
        assert record.title in r.text
    assert ordered[PER_PAGE * 2 - 1].title not in r.text


def test_pagination_sorted_by_catalog_no(client, db_session, record_factory):
    _seed_grid(record_factory)
    R = models.Record
    ordered = _ordered(db_session, R.catalog_no, R.label, R.artist, R.title)

    r = client.get("/records?sort=catalog_no&page=1")
    assert ordered[2].title in r.text
    assert ordered[2].label in r.text
    assert ordered[PER_PAGE].title not in r.text


def test_page_past_the_end_is_empty(client, record_factory):
    record_factory("A", "Only Title", "L")
    r = client.get("/records?page=99")
    assert r.status_code == 200
    assert "Only Title" not in r.text
    assert "No records found." in r.text


def test_garbage_page_means_first_page(client, record_factory):
    record_factory("A", "Only Title", "L")
    r = client.get("/records?page=abc")
    assert r.status_code == 200
    assert "Only Title" in r.text


def test_search_by_artist_title_and_catalog_no(client, record_factory):
    record_factory("Alice Coltrane", "Journey in Satchidananda", "Impulse!", "AS-9203")
    record_factory("Pharoah Sanders", "Karma", "Impulse!", "AS-9181")

    r = client.get("/records/search", params={"searchTerm": "Alice Coltrane"})
    assert "Journey in Satchidananda" in r.text
    assert "Karma" not in r.text

    r = client.get("/records/search", params={"searchTerm": "Karma"})
    assert "Pharoah Sanders" in r.text
    assert "Alice Coltrane" not in r.text

    r = client.get("/records/search", params={"searchTerm": "AS-9181", "searchBy": "catalog_no"})
    assert "Pharoah Sanders" in r.text
    assert "Karma" in r.text
    assert "Journey in Satchidananda" not in r.text


def test_label_search_pages_and_sorts(client, db_session, record_factory):
    for i in range(30):
        record_factory(f"Player {(i * 11) % 30:02d}", f"Side {i:02d}", "Prestige", f"PR-{(i * 17) % 30:02d}")
    record_factory("Outsider", "Not Prestige", "Riverside", "RLP-1")

    R = models.Record
    by_artist = db_session.query(R).filter(R.label == "Prestige").order_by(R.artist, R.title).all()
    r = client.get("/records/search?searchTerm=Prestige&searchBy=label")
    assert by_artist[0].artist in r.text
    assert by_artist[0].title in r.text
    assert by_artist[-1].title not in r.text
    assert "Not Prestige" not in r.text

    by_catalog = db_session.query(R).filter(R.label == "Prestige").order_by(R.catalog_no, R.artist, R.title).all()
    r = client.get("/records/search?searchTerm=Prestige&searchBy=label&sort=catalog_no")
    assert by_catalog[0].title in r.text
    assert by_catalog[0].catalog_no in r.text
    assert by_catalog[-1].title not in r.text


def test_search_keeps_term_in_pagination_links(client, record_factory):
    for i in range(25):
        record_factory(f"Artist {i:02d}", f"Take {i:02d}", "Contemporary")
    r = client.get("/records/search?searchTerm=Contemporary&searchBy=label")
    assert "searchTerm=Contemporary" in r.text
    assert "page=2" in r.text


def test_seeded_faker_data_is_searchable(client, sample_records):
    records = sample_records(10)
    target = records[3]
    r = client.get("/records/search", params={"searchTerm": target.catalog_no, "searchBy": "catalog_no"})
    assert r.status_code == 200
    assert f"/records/{target.id}" in r.text


def test_page_zero_or_negative_means_first_page(client, record_factory):
    record_factory("A", "Only Title", "L")
    for page in ("0", "-3"):
        r = client.get(f"/records?page={page}")
        assert r.status_code == 200
        assert "Only Title" in r.text


def test_enormous_page_number_renders_empty_page(client, record_factory):
    record_factory("A", "Only Title", "L")
    r = client.get("/records?page=99999999999999999999")
    assert r.status_code == 200
    assert "Only Title" not in r.text
    assert "No records found." in r.text

    r = client.get("/records/search?searchTerm=Only&page=99999999999999999999")
    assert r.status_code == 200
    assert "No records found." in r.text


def test_search_keeps_sort_in_pagination_links(client, record_factory):
    for i in range(25):
        record_factory(f"Artist {i:02d}", f"Take {i:02d}", "Contemporary")
    r = client.get("/records/search?searchTerm=Contemporary&searchBy=label&sort=artist")
    assert "searchBy=label&amp;sort=artist&amp;page=2" in r.text


def test_label_link_finds_non_ascii_label(client, record_factory):
    record_factory("Arvo Pärt", "Tabula Rasa", "ÉCM Records", "ECM 1275")
    r = client.get("/records")
    assert "searchBy=label" in r.text

    r = client.get("/records/search", params={"searchTerm": "ÉCM Records", "searchBy": "label"})
    assert r.status_code == 200
    assert "Tabula Rasa" in r.text
    assert "No records found." not in r.text
