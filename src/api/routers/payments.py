# This file defines Stripe checkout, the Stripe webhook and the post-payment onboarding endpoints.
# The webhook reads the raw body because signature verification needs the exact bytes Stripe sent.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Query, Request

from src.api.dependencies import get_payment_service
from src.api.schemas.action_schemas import (
    CheckoutRequest,
    CheckoutResponse,
    OnboardingRequest,
    OnboardingResponse,
    SessionValidationResponse,
    WebhookResponse,
)
from src.api.services.payment_service import PaymentService

router = APIRouter(tags=["payments"])
PaymentServiceDep = Annotated[PaymentService, Depends(get_payment_service)]


@router.post("/stripe/checkout", response_model=CheckoutResponse)
def create_checkout(
    payload: CheckoutRequest,
    service: PaymentServiceDep,
    origin: Annotated[str | None, Header()] = None,
) -> dict[str, object]:
    return service.create_checkout(payload, origin=origin)


@router.post("/stripe/webhook", response_model=WebhookResponse)
async def stripe_webhook(
    request: Request,
    service: PaymentServiceDep,
    stripe_signature: Annotated[str | None, Header()] = None,
) -> dict[str, object]:
    payload = await request.body()
    return service.handle_webhook(payload=payload, signature=stripe_signature)


@router.get("/onboarding/validate", response_model=SessionValidationResponse)
def validate_onboarding_session(
    service: PaymentServiceDep,
    session_id: str | None = Query(default=None),
) -> dict[str, object]:
    return service.validate_session(session_id)


@router.post("/onboarding", response_model=OnboardingResponse, status_code=201)
def complete_onboarding(
    payload: OnboardingRequest,
    service: PaymentServiceDep,
) -> dict[str, object]:
    return service.complete_onboarding(payload)
