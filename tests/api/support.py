# This file provides shared helpers for API endpoint tests.
# Services are rebuilt per test around a resolver that is either unconfigured (bundled data only)
# or backed by a throwaway SQLite file, and external integrations are replaced with fakes.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import stripe
from fastapi.testclient import TestClient

from src.api.api_config import ApiConfig
from src.api.app import app
from src.api.db_access import DatabaseClient
from src.api.dependencies import (
    get_admin_service,
    get_config,
    get_content_service,
    get_database_client,
    get_import_service,
    get_listing_service,
    get_payment_service,
    get_referral_service,
    get_search_service,
)
from src.api.fallback import FallbackResolver
from src.api.mailer import EmailDeliveryError
from src.api.payment_gateway import CheckoutSession, WebhookEvent
from src.api.services.admin_service import AdminService
from src.api.services.content_service import ContentService
from src.api.services.import_service import ImportService
from src.api.services.listing_service import ListingService
from src.api.services.payment_service import PaymentService
from src.api.services.referral_service import ReferralService
from src.api.services.search_service import SearchService
from src.directory.geo import GeoPoint
from src.directory.geocoding import GeocodingUnavailableError


def build_test_config(**overrides: Any) -> ApiConfig:
    """Create deterministic API config for tests."""

    values: dict[str, Any] = {
        "api_name": "Test HydroVac API",
        "api_prefix": "/api",
        "schema_version": "1.0.0",
        "environment": "test",
        "app_version": "0.1.0",
        "site_origin": "https://hydrovac.test",
        "stripe_webhook_secret": "whsec_test",
        "referral_recipient": "ap@hydrovacfinder.com",
        "admin_password": "let-me-in",
    }
    values.update(overrides)
    return ApiConfig(**values)


def sqlite_database(tmp_path: Path) -> DatabaseClient:
    db = DatabaseClient(database_url=f"sqlite:///{tmp_path / 'directory.db'}")
    db.create_schema()
    return db


def insert_rows(db: DatabaseClient, *rows: Any) -> list[int]:
    """Persist ORM rows in insertion order and return their ids."""

    with db.session() as session:
        session.add_all(rows)
        session.flush()
        return [row.id for row in rows]


def unconfigured_resolver() -> FallbackResolver:
    return FallbackResolver(database_configured=False, db=None)


def database_resolver(db: DatabaseClient) -> FallbackResolver:
    return FallbackResolver(database_configured=True, db=db)


class FakeDBClient:
    """Simple fake DB dependency for readiness endpoint tests."""

    def __init__(self, *, connected: bool = True, existing_tables: set[str] | None = None) -> None:
        self._connected = connected
        self._tables = existing_tables if existing_tables is not None else {"companies"}

    def can_connect(self) -> bool:
        return self._connected

    def table_exists(self, table_name: str) -> bool:
        return self._connected and table_name in self._tables


class FakeGeocoder:
    def __init__(
        self, results: dict[str, GeoPoint | None] | None = None, *, unavailable: bool = False
    ) -> None:
        self.results = results or {}
        self.unavailable = unavailable
        self.queries: list[str] = []

    def geocode(self, query: str) -> GeoPoint | None:
        self.queries.append(query)
        if self.unavailable:
            raise GeocodingUnavailableError("geocoder offline")
        return self.results.get(query.strip().lower())


class FakeStripeGateway:
    def __init__(
        self,
        *,
        sessions: dict[str, CheckoutSession] | None = None,
        checkout_error: Exception | None = None,
        valid_signature: str = "t=1,v1=good",
    ) -> None:
        self.sessions = sessions or {}
        self.checkout_error = checkout_error
        self.valid_signature = valid_signature
        self.created: list[dict[str, Any]] = []

    def create_checkout_session(self, **params: Any) -> CheckoutSession:
        if self.checkout_error is not None:
            raise self.checkout_error
        self.created.append(params)
        return CheckoutSession(
            id="cs_test_123",
            url="https://checkout.stripe.test/cs_test_123",
            payment_status="unpaid",
            tier=None,
            customer_email=params.get("customer_email"),
        )

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        if session_id not in self.sessions:
            raise stripe.InvalidRequestError(f"No such checkout.session: {session_id}", "id")
        return self.sessions[session_id]

    def construct_event(self, payload: bytes, signature: str, secret: str) -> WebhookEvent:
        if signature != self.valid_signature:
            raise stripe.SignatureVerificationError("No signatures found", signature)
        return WebhookEvent(id="evt_1", type=payload.decode("utf-8"), object_id="obj_1")


class FakeMailer:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[dict[str, Any]] = []

    def send_text(self, *, to: str, subject: str, text: str, reply_to: str | None = None) -> None:
        if self.fail:
            raise EmailDeliveryError("provider down")
        self.sent.append({"to": to, "subject": subject, "text": text, "reply_to": reply_to})


def paid_session(session_id: str = "cs_paid", *, tier: str | None = "featured") -> CheckoutSession:
    return CheckoutSession(
        id=session_id,
        url=None,
        payment_status="paid",
        tier=tier,
        customer_email="owner@example.com",
    )


def _provide(value: Any) -> Any:
    return lambda: value


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    resolver: FallbackResolver | None = None,
    db_client: Any | None = None,
    geocoder: Any | None = None,
    stripe_gateway: Any | None = None,
    mailer: Any | None = None,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides."""

    resolved_config = config or build_test_config()
    resolved_resolver = resolver or unconfigured_resolver()

    listing_service = ListingService(resolver=resolved_resolver)
    services: dict[Any, Any] = {
        get_listing_service: listing_service,
        get_content_service: ContentService(resolver=resolved_resolver),
        get_search_service: SearchService(
            listings=listing_service,
            geocoder=geocoder,
            default_radius=resolved_config.default_search_radius,
        ),
        get_payment_service: PaymentService(
            config=resolved_config, gateway=stripe_gateway, resolver=resolved_resolver
        ),
        get_referral_service: ReferralService(config=resolved_config, mailer=mailer),
        get_admin_service: AdminService(config=resolved_config),
        get_import_service: ImportService(resolver=resolved_resolver),
    }

    app.dependency_overrides[get_config] = lambda: resolved_config
    app.dependency_overrides[get_database_client] = lambda: db_client
    for dependency, service in services.items():
        app.dependency_overrides[dependency] = _provide(service)

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
