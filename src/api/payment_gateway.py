# This file wraps the Stripe SDK calls used by checkout, onboarding and the webhook.
# The secret key is passed per call so no global SDK state is mutated at import time.
# Stripe objects are reduced to small dataclasses here, so services never depend on SDK object shapes.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import stripe


@dataclass(frozen=True)
class CheckoutSession:
    id: str
    url: str | None
    payment_status: str | None
    tier: str | None
    customer_email: str | None


@dataclass(frozen=True)
class WebhookEvent:
    id: str
    type: str
    object_id: str | None


def _metadata_value(obj: Any, key: str) -> str | None:
    metadata = getattr(obj, "metadata", None)
    if not metadata:
        return None
    try:
        value = metadata[key]
    except KeyError:
        return None
    return str(value) if value else None


def _to_checkout_session(session: Any) -> CheckoutSession:
    details = getattr(session, "customer_details", None)
    email = getattr(details, "email", None) if details else None
    return CheckoutSession(
        id=session.id,
        url=getattr(session, "url", None),
        payment_status=getattr(session, "payment_status", None),
        tier=_metadata_value(session, "tier"),
        customer_email=email or getattr(session, "customer_email", None),
    )


class StripeGateway:
    """Thin adapter over `stripe` for the three operations the API needs."""

    def __init__(self, *, api_key: str) -> None:
        self.api_key = api_key

    def create_checkout_session(self, **params: Any) -> CheckoutSession:
        session = stripe.checkout.Session.create(api_key=self.api_key, **params)
        return _to_checkout_session(session)

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        session = stripe.checkout.Session.retrieve(session_id, api_key=self.api_key)
        return _to_checkout_session(session)

    def construct_event(self, payload: bytes, signature: str, secret: str) -> WebhookEvent:
        event = stripe.Webhook.construct_event(payload, signature, secret)
        data_object = getattr(getattr(event, "data", None), "object", None)
        return WebhookEvent(
            id=event.id,
            type=event.type,
            object_id=getattr(data_object, "id", None),
        )
