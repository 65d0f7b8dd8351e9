"""
Unit tests for the bundled directory dataset and the import filtering rules.
"""

from src.directory import seed_data
from src.directory.validation import filter_valid_urls, is_valid_url


def test_importable_companies_skip_missing_websites_and_duplicates() -> None:
    records = seed_data.importable_companies()
    ids = [record["id"] for record in records]

    assert 107 not in ids
    assert 109 not in ids
    assert len(records) == 7


def test_export_row_is_converted_to_company_record() -> None:
    records = {record["id"]: record for record in seed_data.importable_companies()}
    bayou = records[102]

    assert bayou["city"] == "Houston"
    assert bayou["state"] == "Texas"
    assert bayou["specialties"] == "Industrial Cleaning, Hydro Excavation, Tank Cleaning"
    assert bayou["union_affiliated"] is True
    assert bayou["latitude"] == 29.7355
    assert bayou["created_at"].tzinfo is not None
    assert records[104]["tier"] == "basic"
    assert records[108]["latitude"] is None


def test_company_record_requires_name_and_location() -> None:
    austin = "1 A St, Austin, TX 78701, USA"
    assert seed_data.company_record_from_export({"name": "", "address": austin}) is None
    assert seed_data.company_record_from_export({"name": "Nowhere Vac", "address": "PO Box 9"}) is None


def test_fallback_companies_are_sorted_by_name() -> None:
    names = [record["name"] for record in seed_data.fallback_companies()]
    assert names == sorted(names)
    assert names[0] == "Bayou City Vac Services"


def test_fallback_facilities_store_materials_as_text() -> None:
    facilities = seed_data.fallback_facilities()

    assert [facility["id"] for facility in facilities] == list(range(1, 11))
    assert all(isinstance(facility["materials_accepted"], str) for facility in facilities)
    assert facilities[0]["name"] == "Clean Harbors Deer Park"


def test_fallback_copies_are_independent() -> None:
    tiers = seed_data.fallback_pricing_tiers()
    tiers[0]["monthly"] = 1
    homepage = seed_data.fallback_homepage()
    homepage["hero_title"] = "changed"

    assert seed_data.fallback_pricing_tiers()[0]["monthly"] == 100
    assert seed_data.fallback_homepage()["hero_title"] == "Find Hydro-Vac Services Near You"


def test_url_validation() -> None:
    assert is_valid_url("https://example.com/a.png")
    assert is_valid_url(" http://example.com ")
    assert not is_valid_url("example.com/a.png")
    assert not is_valid_url("/images/a.png")
    assert not is_valid_url("")
    assert not is_valid_url(None)
    assert not is_valid_url(42)
    assert filter_valid_urls(["https://a.example/x.jpg", "nope", " https://b.example "]) == [
        "https://a.example/x.jpg",
        "https://b.example",
    ]
    assert filter_valid_urls(None) == []
