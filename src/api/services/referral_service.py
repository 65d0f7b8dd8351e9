# This file implements the "refer a company" form: field validation and the notification email.
# Referrals are not stored; the email to the configured recipient is the only record.

from __future__ import annotations

import logging
import re
from typing import Any, Final

from src.api.api_config import ApiConfig
from src.api.error_handlers import NotConfiguredError, UpstreamError, ValidationError
from src.api.mailer import EmailDeliveryError, MailchimpMailer
from src.api.schemas.action_schemas import ReferralRequest

logger = logging.getLogger(__name__)

EMAIL_RE: Final[re.Pattern[str]] = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED_FIELDS: Final[tuple[str, ...]] = (
    "company_name",
    "company_phone",
    "company_contact_person",
    "referrer_name",
    "referrer_email",
    "referrer_phone",
)

SUCCESS_MESSAGE: Final[str] = "Referral submitted successfully! We will contact you soon."


def validate_referral(referral: ReferralRequest) -> dict[str, str]:
    """Return the trimmed referral fields, or raise ValidationError naming every bad field."""

    values = {field: (getattr(referral, field) or "").strip() for field in REQUIRED_FIELDS}
    errors = {field: "This field is required." for field, value in values.items() if not value}
    if "referrer_email" not in errors and not EMAIL_RE.match(values["referrer_email"]):
        errors["referrer_email"] = "Invalid email address."
    if errors:
        raise ValidationError(errors)
    return values


def format_referral_email(values: dict[str, str]) -> tuple[str, str]:
    subject = f"New Referral: {values['company_name']}"
    body = "\n".join(
        [
            "New Referral Submission",
            "========================",
            "",
            "COMPANY BEING REFERRED",
            "----------------------",
            f"Company Name: {values['company_name']}",
            f"Contact Person: {values['company_contact_person']}",
            f"Phone Number: {values['company_phone']}",
            "",
            "REFERRER INFORMATION",
            "--------------------",
            f"Name: {values['referrer_name']}",
            f"Email: {values['referrer_email']}",
            f"Phone: {values['referrer_phone']}",
            "",
            "---",
            "This referral was submitted through HydroVacFinder.com",
        ]
    )
    return subject, body


class ReferralService:
    def __init__(self, *, config: ApiConfig, mailer: MailchimpMailer | None) -> None:
        self.config = config
        self.mailer = mailer

    def submit(self, referral: ReferralRequest) -> dict[str, Any]:
        values = validate_referral(referral)
        if self.mailer is None:
            raise NotConfiguredError(
                "Email delivery is not configured.", error_code="EMAIL_NOT_CONFIGURED"
            )

        subject, body = format_referral_email(values)
        try:
            self.mailer.send_text(
                to=self.config.referral_recipient,
                subject=subject,
                text=body,
                reply_to=values["referrer_email"],
            )
        except EmailDeliveryError as exc:
            logger.error("Referral email for %s failed: %s", values["company_name"], exc)
            raise UpstreamError(
                "Failed to send the referral. Please try again.",
                error_code="EMAIL_SEND_FAILED",
            ) from exc

        logger.info("Referral received for company: %s", values["company_name"])
        return {"success": True, "message": SUCCESS_MESSAGE}
