# This file defines request and response schemas for checkout, webhook, onboarding,
# referral and admin login endpoints.
# These endpoints return their payload directly rather than inside the read envelope,
# since they answer a single action instead of serving data.

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    product_type: str | None = None
    price_id: str | None = None
    mode: Literal["payment", "subscription"] = "payment"
    customer_email: str | None = None
    state: str | None = None
    success_url: str | None = None
    cancel_url: str | None = None
    metadata: dict[str, str] = Field(default_factory=dict)


class CheckoutResponse(BaseModel):
    session_id: str
    url: str | None = None


class WebhookResponse(BaseModel):
    received: bool


class SessionValidationResponse(BaseModel):
    valid: bool
    tier: str
    email: str


class OnboardingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    session_id: str | None = None
    name: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    phone: str | None = None
    website: str | None = None
    email: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)


class OnboardedCompany(BaseModel):
    id: int
    name: str
    tier: str


class OnboardingResponse(BaseModel):
    success: bool
    company: OnboardedCompany


class ReferralRequest(BaseModel):
    company_name: str | None = None
    company_phone: str | None = None
    company_contact_person: str | None = None
    referrer_name: str | None = None
    referrer_email: str | None = None
    referrer_phone: str | None = None


class ReferralResponse(BaseModel):
    success: bool
    message: str


class AdminLoginRequest(BaseModel):
    # Typed loosely so a non-string password is reported as a format error, not a schema error.
    password: Any = None


class AdminLoginResponse(BaseModel):
    success: bool


class ImportSummary(BaseModel):
    companies_imported: int
    companies_skipped: int
    facilities_imported: int
    facilities_skipped: int
