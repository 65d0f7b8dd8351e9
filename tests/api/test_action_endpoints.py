# This file tests the referral form, admin login and the bundled seed import.

from __future__ import annotations

from pathlib import Path

from src.directory.models import Company
from tests.api.support import (
    FakeMailer,
    api_test_client,
    build_test_config,
    database_resolver,
    insert_rows,
    sqlite_database,
)

_REFERRAL = {
    "company_name": "Acme Hydro",
    "company_phone": "(555) 010-2000",
    "company_contact_person": "Jordan Lee",
    "referrer_name": "Sam Rivera",
    "referrer_email": "sam@example.com",
    "referrer_phone": "(555) 010-3000",
}


def test_referral_sends_formatted_email() -> None:
    mailer = FakeMailer()
    with api_test_client(mailer=mailer) as client:
        response = client.post("/api/referral", json={**_REFERRAL, "company_name": "  Acme Hydro "})

    assert response.status_code == 200
    assert response.json()["success"] is True
    (message,) = mailer.sent
    assert message["to"] == "ap@hydrovacfinder.com"
    assert message["subject"] == "New Referral: Acme Hydro"
    assert message["reply_to"] == "sam@example.com"
    assert "Company Name: Acme Hydro" in message["text"]
    assert "Contact Person: Jordan Lee" in message["text"]
    assert "Email: sam@example.com" in message["text"]


def test_referral_reports_each_invalid_field() -> None:
    mailer = FakeMailer()
    with api_test_client(mailer=mailer) as client:
        response = client.post(
            "/api/referral",
            json={**_REFERRAL, "company_phone": "", "referrer_email": "not-an-email"},
        )
        empty = client.post("/api/referral", json={})

    assert response.status_code == 400
    assert set(response.json()["details"]) == {"company_phone", "referrer_email"}
    assert len(empty.json()["details"]) == 6
    assert mailer.sent == []


def test_referral_without_email_provider_returns_503() -> None:
    with api_test_client(mailer=None) as client:
        response = client.post("/api/referral", json=_REFERRAL)

    assert response.status_code == 503
    assert response.json()["error"] == "EMAIL_NOT_CONFIGURED"


def test_referral_delivery_failure_returns_500() -> None:
    with api_test_client(mailer=FakeMailer(fail=True)) as client:
        response = client.post("/api/referral", json=_REFERRAL)

    assert response.status_code == 500
    assert response.json()["error"] == "EMAIL_SEND_FAILED"


def test_admin_login_outcomes() -> None:
    with api_test_client() as client:
        ok = client.post("/api/admin/login", json={"password": "let-me-in"})
        wrong = client.post("/api/admin/login", json={"password": "guess"})
        missing = client.post("/api/admin/login", json={})
        numeric = client.post("/api/admin/login", json={"password": 1234})

    assert ok.status_code == 200
    assert ok.json() == {"success": True}
    assert wrong.status_code == 401
    assert wrong.json()["error"] == "INVALID_PASSWORD"
    assert missing.status_code == 400
    assert numeric.status_code == 400


def test_admin_login_without_configured_password_returns_503() -> None:
    config = build_test_config(admin_password=None)
    with api_test_client(config=config) as client:
        response = client.post("/api/admin/login", json={"password": "anything"})

    assert response.status_code == 503
    assert response.json()["error"] == "ADMIN_NOT_CONFIGURED"


def test_import_seeds_database_once(tmp_path: Path) -> None:
    db = sqlite_database(tmp_path)
    with api_test_client(resolver=database_resolver(db)) as client:
        first = client.post("/api/import")
        second = client.post("/api/import")
        companies = client.get("/api/companies").json()["data"]

    assert first.status_code == 200
    assert first.json() == {
        "companies_imported": 7,
        "companies_skipped": 0,
        "facilities_imported": 10,
        "facilities_skipped": 0,
    }
    assert second.json() == {
        "companies_imported": 0,
        "companies_skipped": 7,
        "facilities_imported": 0,
        "facilities_skipped": 10,
    }
    assert len(companies) == 7
    assert all(company["website"] for company in companies)


def test_import_skips_companies_already_present_case_insensitively(tmp_path: Path) -> None:
    db = sqlite_database(tmp_path)
    insert_rows(db, Company(name="BAYOU CITY VAC SERVICES", city="Houston", state="texas"))
    with api_test_client(resolver=database_resolver(db)) as client:
        summary = client.post("/api/import").json()

    assert summary["companies_imported"] == 6
    assert summary["companies_skipped"] == 1


def test_import_without_datastore_returns_503() -> None:
    with api_test_client() as client:
        response = client.post("/api/import")

    assert response.status_code == 503
