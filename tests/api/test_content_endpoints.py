# This file tests state landing pages, pricing tiers, homepage content and the homepage slideshow.

from __future__ import annotations

from pathlib import Path

from tests.api.support import api_test_client, database_resolver, sqlite_database


def test_state_pages_without_datastore() -> None:
    with api_test_client() as client:
        listed = client.get("/api/state")
        single = client.get("/api/state/1")

    assert listed.status_code == 200
    assert listed.json()["data"] == []
    assert listed.json()["source"] == "fallback"
    assert single.status_code == 503


def test_state_page_crud_orders_by_state(tmp_path: Path) -> None:
    db = sqlite_database(tmp_path)
    with api_test_client(resolver=database_resolver(db)) as client:
        texas = client.post(
            "/api/state",
            json={
                "state": "Texas",
                "header": "Hydro Vac in Texas",
                "images": ["https://cdn.example.com/tx.jpg", "tx.jpg"],
            },
        )
        client.post("/api/state", json={"state": "Alabama"})
        duplicate = client.post("/api/state", json={"state": "Texas"})

        assert texas.status_code == 201
        assert texas.json()["data"]["images"] == ["https://cdn.example.com/tx.jpg"]
        assert duplicate.status_code == 400
        assert "state" in duplicate.json()["details"]

        states = [page["state"] for page in client.get("/api/state").json()["data"]]
        assert states == ["Alabama", "Texas"]

        page_id = texas.json()["data"]["id"]
        updated = client.put(f"/api/state/{page_id}", json={"description": "Statewide coverage"})
        assert updated.json()["data"]["description"] == "Statewide coverage"
        assert updated.json()["data"]["images"] == ["https://cdn.example.com/tx.jpg"]

        assert client.delete(f"/api/state/{page_id}").status_code == 200
        assert client.get(f"/api/state/{page_id}").status_code == 404


def test_pricing_tiers_fall_back_to_published_prices() -> None:
    with api_test_client() as client:
        payload = client.get("/api/pricing").json()
        single = client.get("/api/pricing/2").json()

    assert payload["source"] == "fallback"
    assert [(tier["name"], tier["monthly"], tier["annual"]) for tier in payload["data"]] == [
        ("Verified", 100, 1000),
        ("Featured", 125, 1250),
        ("Premium", 150, 1500),
    ]
    assert single["data"]["name"] == "Featured"


def test_pricing_tier_crud(tmp_path: Path) -> None:
    db = sqlite_database(tmp_path)
    with api_test_client(resolver=database_resolver(db)) as client:
        created = client.post(
            "/api/pricing", json={"name": "Enterprise", "monthly": 400, "annual": 4000}
        )
        tier_id = created.json()["data"]["id"]
        updated = client.put(f"/api/pricing/{tier_id}", json={"monthly": 450})
        null_update = client.put(f"/api/pricing/{tier_id}", json={"annual": None})
        negative = client.post("/api/pricing", json={"name": "Bad", "monthly": -1, "annual": 0})
        deleted = client.delete(f"/api/pricing/{tier_id}")

    assert created.status_code == 201
    assert updated.json()["data"]["monthly"] == 450
    assert updated.json()["data"]["annual"] == 4000
    assert null_update.status_code == 400
    assert negative.status_code == 400
    assert deleted.status_code == 200


def test_homepage_defaults_without_datastore() -> None:
    with api_test_client() as client:
        payload = client.get("/api/homepage").json()

    assert payload["source"] == "fallback"
    assert payload["data"]["id"] is None
    assert payload["data"]["hero_title"] == "Find Hydro-Vac Services Near You"
    assert payload["data"]["slideshow_enabled"] is False


def test_homepage_first_read_creates_default_record(tmp_path: Path) -> None:
    db = sqlite_database(tmp_path)
    with api_test_client(resolver=database_resolver(db)) as client:
        first = client.get("/api/homepage").json()["data"]
        second = client.get("/api/homepage").json()["data"]
        updated = client.put(
            "/api/homepage", json={"hero_title": "Dig Safely", "slideshow_enabled": True}
        ).json()["data"]

    assert first["id"] is not None
    assert second["id"] == first["id"]
    assert updated["id"] == first["id"]
    assert updated["hero_title"] == "Dig Safely"
    assert updated["hero_subtitle"] == first["hero_subtitle"]
    assert updated["slideshow_enabled"] is True


def test_homepage_update_without_prior_read_creates_record(tmp_path: Path) -> None:
    db = sqlite_database(tmp_path)
    with api_test_client(resolver=database_resolver(db)) as client:
        response = client.put("/api/homepage", json={"main_image": "https://cdn.example.com/hero.jpg"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["main_image"] == "https://cdn.example.com/hero.jpg"
    assert data["hero_title"] == "Find Hydro-Vac Services Near You"


def test_homepage_slideshow(tmp_path: Path) -> None:
    db = sqlite_database(tmp_path)
    with api_test_client(resolver=database_resolver(db)) as client:
        first = client.post(
            "/api/homepage/slideshow",
            json={"image_url": "https://cdn.example.com/1.jpg", "caption": "Crew at work"},
        )
        second = client.post(
            "/api/homepage/slideshow", json={"image_url": "https://cdn.example.com/2.jpg"}
        )
        invalid = client.post("/api/homepage/slideshow", json={"image_url": "javascript-alert"})
        ordered = client.get("/api/homepage/slideshow").json()["data"]
        deleted = client.delete(f"/api/homepage/slideshow/{first.json()['data']['id']}")
        missing = client.delete(f"/api/homepage/slideshow/{first.json()['data']['id']}")
        remaining = client.get("/api/homepage/slideshow").json()["data"]

    assert first.status_code == 201
    assert invalid.status_code == 400
    assert [slide["image_url"] for slide in ordered] == [
        "https://cdn.example.com/1.jpg",
        "https://cdn.example.com/2.jpg",
    ]
    assert deleted.status_code == 200
    assert missing.status_code == 404
    assert remaining == [second.json()["data"]]
