# This file implements paid placement: Stripe checkout, webhook intake, paid-session validation
# and the onboarding step that turns a paid session into a company listing.
# Stripe failures caused by the request (bad price id, unknown session) are reported as 400;
# a missing secret key or webhook secret is reported as 503 so clients can tell them apart.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Final

import stripe
from sqlalchemy.orm import Session

from src.api.api_config import ApiConfig
from src.api.error_handlers import NotConfiguredError, UpstreamError, ValidationError
from src.api.fallback import FallbackResolver
from src.api.payment_gateway import CheckoutSession, StripeGateway
from src.api.schemas.action_schemas import CheckoutRequest, OnboardingRequest
from src.directory.models import Company
from src.directory.tier_ranking import normalize_tier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Product:
    name: str
    description: str
    price_in_cents: int


PRODUCT_CATALOG: Final[dict[str, Product]] = {
    "state-company": Product(
        name="State Page Company Ownership",
        description="Exclusive state page branding and featured placement for 12 months",
        price_in_cents=250000,
    ),
    "state-disposal": Product(
        name="Disposal Facility Featured Listing",
        description="Featured spotlight on state disposal page for 12 months",
        price_in_cents=175000,
    ),
}

HANDLED_WEBHOOK_EVENTS: Final[frozenset[str]] = frozenset(
    {
        "checkout.session.completed",
        "payment_intent.succeeded",
        "payment_intent.payment_failed",
        "customer.subscription.created",
        "customer.subscription.updated",
        "customer.subscription.deleted",
        "invoice.paid",
        "invoice.payment_failed",
    }
)

ONBOARDING_REQUIRED_FIELDS: Final[tuple[str, ...]] = (
    "session_id",
    "name",
    "address",
    "city",
    "state",
    "phone",
    "email",
)


class PaymentService:
    """Checkout and onboarding flows backed by Stripe."""

    def __init__(
        self,
        *,
        config: ApiConfig,
        gateway: StripeGateway | None,
        resolver: FallbackResolver,
    ) -> None:
        self.config = config
        self.gateway = gateway
        self.resolver = resolver

    def _require_gateway(self) -> StripeGateway:
        if self.gateway is None:
            raise NotConfiguredError(
                "Payment processing is not configured.", error_code="PAYMENTS_NOT_CONFIGURED"
            )
        return self.gateway

    def create_checkout(self, request: CheckoutRequest, *, origin: str | None) -> dict[str, Any]:
        gateway = self._require_gateway()

        if not request.product_type and not request.price_id:
            raise ValidationError({"product_type": "Either product_type or price_id is required."})

        mode = request.mode
        if request.price_id:
            line_items: list[dict[str, Any]] = [{"price": request.price_id, "quantity": 1}]
        else:
            product = PRODUCT_CATALOG.get(request.product_type or "")
            if product is None:
                supported = ", ".join(sorted(PRODUCT_CATALOG))
                raise ValidationError(
                    {"product_type": f"Unknown product type; expected one of {supported}."}
                )
            line_items = [
                {
                    "price_data": {
                        "currency": "usd",
                        "product_data": {"name": product.name, "description": product.description},
                        "unit_amount": product.price_in_cents,
                    },
                    "quantity": 1,
                }
            ]
            # Catalog products are one-time purchases.
            mode = "payment"

        metadata = dict(request.metadata)
        if request.product_type:
            metadata["productType"] = request.product_type
        if request.state:
            metadata["state"] = request.state

        base_url = (origin or self.config.site_origin).rstrip("/")
        params: dict[str, Any] = {
            "line_items": line_items,
            "mode": mode,
            "success_url": request.success_url
            or f"{base_url}/checkout/success?session_id={{CHECKOUT_SESSION_ID}}",
            "cancel_url": request.cancel_url or f"{base_url}/pricing",
            "metadata": metadata,
            "billing_address_collection": "required",
            "phone_number_collection": {"enabled": True},
        }
        if request.customer_email:
            params["customer_email"] = request.customer_email

        try:
            session = gateway.create_checkout_session(**params)
        except stripe.StripeError as exc:
            logger.warning("Stripe rejected checkout session: %s", exc)
            raise UpstreamError(
                exc.user_message or str(exc),
                error_code="PAYMENT_PROVIDER_ERROR",
                caller_correctable=True,
                details={"provider_code": exc.code} if exc.code else None,
            ) from exc

        logger.info("Created checkout session %s (mode=%s)", session.id, mode)
        return {"session_id": session.id, "url": session.url}

    def handle_webhook(self, *, payload: bytes, signature: str | None) -> dict[str, Any]:
        if not signature:
            raise ValidationError({"stripe-signature": "Missing stripe-signature header."})
        if not self.config.stripe_webhook_secret:
            raise NotConfiguredError(
                "Webhook secret is not configured.", error_code="WEBHOOK_NOT_CONFIGURED"
            )
        gateway = self._require_gateway()

        try:
            event = gateway.construct_event(payload, signature, self.config.stripe_webhook_secret)
        except (ValueError, stripe.SignatureVerificationError) as exc:
            logger.warning("Webhook signature verification failed: %s", exc)
            raise UpstreamError(
                "Webhook signature verification failed.",
                error_code="INVALID_SIGNATURE",
                caller_correctable=True,
            ) from exc

        if event.type in HANDLED_WEBHOOK_EVENTS:
            logger.info("Stripe event %s (%s) for %s", event.type, event.id, event.object_id)
        else:
            logger.info("Unhandled Stripe event type: %s", event.type)
        return {"received": True}

    def _paid_session(self, session_id: str) -> CheckoutSession:
        gateway = self._require_gateway()
        try:
            session = gateway.retrieve_checkout_session(session_id)
        except stripe.StripeError as exc:
            raise UpstreamError(
                "Invalid or expired session.",
                error_code="INVALID_SESSION",
                caller_correctable=True,
            ) from exc
        if session.payment_status != "paid":
            raise UpstreamError(
                "Payment has not been completed.",
                error_code="PAYMENT_INCOMPLETE",
                caller_correctable=True,
            )
        return session

    def validate_session(self, session_id: str | None) -> dict[str, Any]:
        if not session_id or not session_id.strip():
            raise ValidationError({"session_id": "Session ID is required."})
        session = self._paid_session(session_id.strip())
        return {
            "valid": True,
            "tier": normalize_tier(session.tier),
            "email": session.customer_email or "",
        }

    def complete_onboarding(self, request: OnboardingRequest) -> dict[str, Any]:
        values = request.model_dump()
        missing = {
            field: "This field is required."
            for field in ONBOARDING_REQUIRED_FIELDS
            if not (values.get(field) or "").strip()
        }
        if missing:
            raise ValidationError(missing)

        session = self._paid_session(request.session_id.strip())
        tier = normalize_tier(session.tier)

        def operation(db_session: Session) -> dict[str, Any]:
            company = Company(
                name=request.name.strip(),
                address=request.address,
                city=request.city.strip(),
                state=request.state.strip(),
                phone=request.phone,
                website=request.website or None,
                email=request.email,
                tier=tier,
                latitude=request.latitude,
                longitude=request.longitude,
                union_affiliated=False,
            )
            db_session.add(company)
            db_session.flush()
            return {"id": company.id, "name": company.name, "tier": company.tier}

        company = self.resolver.write("company", operation)
        logger.info("Onboarded company %s from session %s", company["id"], session.id)
        return {"success": True, "company": company}
