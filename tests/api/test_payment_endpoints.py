# This file tests Stripe checkout, webhook intake, session validation and onboarding.
# Stripe itself is replaced by a fake gateway; the failure modes it raises are real stripe errors.

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import stripe

from src.directory.models import Company
from tests.api.support import (
    FakeStripeGateway,
    api_test_client,
    build_test_config,
    database_resolver,
    paid_session,
    sqlite_database,
)

_ONBOARDING = {
    "session_id": "cs_paid",
    "name": "New Vac Co",
    "address": "1 Main St",
    "city": "Dallas",
    "state": "Texas",
    "phone": "(214) 555-0101",
    "email": "owner@example.com",
    "website": "https://newvac.example.com",
}


def test_checkout_without_stripe_returns_503() -> None:
    with api_test_client(stripe_gateway=None) as client:
        response = client.post("/api/stripe/checkout", json={"product_type": "state-company"})

    assert response.status_code == 503
    assert response.json()["error"] == "PAYMENTS_NOT_CONFIGURED"


def test_checkout_for_catalog_product_builds_one_time_session() -> None:
    gateway = FakeStripeGateway()
    with api_test_client(stripe_gateway=gateway) as client:
        response = client.post(
            "/api/stripe/checkout",
            json={
                "product_type": "state-company",
                "state": "Texas",
                "mode": "subscription",
                "customer_email": "buyer@example.com",
            },
            headers={"origin": "https://www.hydrovacfinder.com"},
        )

    assert response.status_code == 200
    assert response.json() == {
        "session_id": "cs_test_123",
        "url": "https://checkout.stripe.test/cs_test_123",
    }
    (params,) = gateway.created
    assert params["mode"] == "payment"
    assert params["line_items"][0]["price_data"]["unit_amount"] == 250000
    assert params["metadata"] == {"productType": "state-company", "state": "Texas"}
    assert params["success_url"] == (
        "https://www.hydrovacfinder.com/checkout/success?session_id={CHECKOUT_SESSION_ID}"
    )
    assert params["cancel_url"] == "https://www.hydrovacfinder.com/pricing"
    assert params["customer_email"] == "buyer@example.com"
    assert params["billing_address_collection"] == "required"


def test_checkout_with_price_id_keeps_requested_mode_and_site_origin() -> None:
    gateway = FakeStripeGateway()
    with api_test_client(stripe_gateway=gateway) as client:
        client.post(
            "/api/stripe/checkout",
            json={"price_id": "price_featured_monthly", "mode": "subscription"},
        )

    (params,) = gateway.created
    assert params["mode"] == "subscription"
    assert params["line_items"] == [{"price": "price_featured_monthly", "quantity": 1}]
    assert params["cancel_url"] == "https://hydrovac.test/pricing"
    assert "customer_email" not in params


def test_checkout_rejects_unknown_product_and_empty_request() -> None:
    with api_test_client(stripe_gateway=FakeStripeGateway()) as client:
        unknown = client.post("/api/stripe/checkout", json={"product_type": "moon-landing"})
        empty = client.post("/api/stripe/checkout", json={})

    assert unknown.status_code == 400
    assert "product_type" in unknown.json()["details"]
    assert empty.status_code == 400


def test_checkout_reports_stripe_rejection_as_400() -> None:
    error = stripe.InvalidRequestError("No such price: 'price_gone'", "line_items[0][price]")
    with api_test_client(stripe_gateway=FakeStripeGateway(checkout_error=error)) as client:
        response = client.post("/api/stripe/checkout", json={"price_id": "price_gone"})

    assert response.status_code == 400
    assert response.json()["error"] == "PAYMENT_PROVIDER_ERROR"


def test_webhook_requires_signature_header() -> None:
    with api_test_client(stripe_gateway=FakeStripeGateway()) as client:
        response = client.post("/api/stripe/webhook", content=b"invoice.paid")

    assert response.status_code == 400
    assert "stripe-signature" in response.json()["details"]


def test_webhook_rejects_bad_signature() -> None:
    with api_test_client(stripe_gateway=FakeStripeGateway()) as client:
        response = client.post(
            "/api/stripe/webhook",
            content=b"invoice.paid",
            headers={"stripe-signature": "t=1,v1=forged"},
        )

    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_SIGNATURE"


def test_webhook_without_secret_returns_503() -> None:
    config = build_test_config(stripe_webhook_secret=None)
    with api_test_client(config=config, stripe_gateway=FakeStripeGateway()) as client:
        response = client.post(
            "/api/stripe/webhook",
            content=b"invoice.paid",
            headers={"stripe-signature": "t=1,v1=good"},
        )

    assert response.status_code == 503
    assert response.json()["error"] == "WEBHOOK_NOT_CONFIGURED"


def test_webhook_acknowledges_known_and_unknown_events() -> None:
    with api_test_client(stripe_gateway=FakeStripeGateway()) as client:
        known = client.post(
            "/api/stripe/webhook",
            content=b"checkout.session.completed",
            headers={"stripe-signature": "t=1,v1=good"},
        )
        unknown = client.post(
            "/api/stripe/webhook",
            content=b"charge.dispute.created",
            headers={"stripe-signature": "t=1,v1=good"},
        )

    assert known.json() == {"received": True}
    assert unknown.json() == {"received": True}


def test_validate_session_outcomes() -> None:
    gateway = FakeStripeGateway(
        sessions={
            "cs_paid": paid_session(),
            "cs_untiered": paid_session("cs_untiered", tier=None),
            "cs_open": replace(paid_session("cs_open"), payment_status="unpaid"),
        }
    )
    with api_test_client(stripe_gateway=gateway) as client:
        paid = client.get("/api/onboarding/validate", params={"session_id": "cs_paid"})
        untiered = client.get("/api/onboarding/validate", params={"session_id": "cs_untiered"})
        unpaid = client.get("/api/onboarding/validate", params={"session_id": "cs_open"})
        unknown = client.get("/api/onboarding/validate", params={"session_id": "cs_nope"})
        missing = client.get("/api/onboarding/validate")

    assert paid.json() == {"valid": True, "tier": "featured", "email": "owner@example.com"}
    assert untiered.json()["tier"] == "basic"
    assert unknown.status_code == 400
    assert unknown.json()["error"] == "INVALID_SESSION"
    assert unpaid.status_code == 400
    assert unpaid.json()["error"] == "PAYMENT_INCOMPLETE"
    assert missing.status_code == 400
    assert "session_id" in missing.json()["details"]


def test_onboarding_reports_every_missing_field() -> None:
    with api_test_client(stripe_gateway=FakeStripeGateway()) as client:
        response = client.post("/api/onboarding", json={"session_id": "cs_paid", "name": " "})

    assert response.status_code == 400
    assert set(response.json()["details"]) == {"name", "address", "city", "state", "phone", "email"}


def test_onboarding_creates_company_with_paid_tier(tmp_path: Path) -> None:
    db = sqlite_database(tmp_path)
    gateway = FakeStripeGateway(sessions={"cs_paid": paid_session(tier="premium")})
    with api_test_client(resolver=database_resolver(db), stripe_gateway=gateway) as client:
        response = client.post("/api/onboarding", json=_ONBOARDING)

    assert response.status_code == 201
    payload = response.json()
    assert payload["success"] is True
    assert payload["company"]["name"] == "New Vac Co"
    assert payload["company"]["tier"] == "premium"

    with db.session() as session:
        company = session.get(Company, payload["company"]["id"])
        assert company is not None
        assert company.city == "Dallas"
        assert company.union_affiliated is False


def test_onboarding_normalizes_session_tier(tmp_path: Path) -> None:
    db = sqlite_database(tmp_path)
    gateway = FakeStripeGateway(
        sessions={
            "cs_paid": paid_session(tier="Featured"),
            "cs_gold": paid_session("cs_gold", tier="gold"),
        }
    )
    with api_test_client(resolver=database_resolver(db), stripe_gateway=gateway) as client:
        cased = client.post("/api/onboarding", json=_ONBOARDING)
        unknown = client.post(
            "/api/onboarding",
            json={**_ONBOARDING, "session_id": "cs_gold", "name": "Gold Vac Co"},
        )
        validated = client.get("/api/onboarding/validate", params={"session_id": "cs_gold"})

    assert cased.json()["company"]["tier"] == "featured"
    assert unknown.json()["company"]["tier"] == "basic"
    assert validated.json()["tier"] == "basic"
    with db.session() as session:
        stored = session.get(Company, unknown.json()["company"]["id"])
        assert stored is not None
        assert stored.tier == "basic"


def test_onboarding_with_unpaid_session_creates_nothing(tmp_path: Path) -> None:
    db = sqlite_database(tmp_path)
    unpaid = replace(paid_session(), payment_status="unpaid")
    gateway = FakeStripeGateway(sessions={"cs_paid": unpaid})
    with api_test_client(resolver=database_resolver(db), stripe_gateway=gateway) as client:
        response = client.post("/api/onboarding", json=_ONBOARDING)
        listed = client.get("/api/companies").json()["data"]

    assert response.status_code == 400
    assert response.json()["error"] == "PAYMENT_INCOMPLETE"
    assert listed == []


def test_onboarding_without_datastore_returns_503() -> None:
    gateway = FakeStripeGateway(sessions={"cs_paid": paid_session()})
    with api_test_client(stripe_gateway=gateway) as client:
        response = client.post("/api/onboarding", json=_ONBOARDING)

    assert response.status_code == 503
