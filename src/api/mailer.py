# This file sends transactional email through Mailchimp Transactional (Mandrill).
# Provider failures, including per-recipient rejections, surface as EmailDeliveryError.

from __future__ import annotations

import logging

import mailchimp_transactional as MailchimpTransactional
from mailchimp_transactional.api_client import ApiClientError

logger = logging.getLogger(__name__)

_FAILED_STATUSES = {"rejected", "invalid"}


class EmailDeliveryError(RuntimeError):
    """Raised when the email provider refuses or fails to accept a message."""


class MailchimpMailer:
    def __init__(self, *, api_key: str, from_email: str, from_name: str) -> None:
        self.from_email = from_email
        self.from_name = from_name
        self.client = MailchimpTransactional.Client(api_key)

    def send_text(self, *, to: str, subject: str, text: str, reply_to: str | None = None) -> None:
        message: dict[str, object] = {
            "from_name": self.from_name,
            "from_email": self.from_email,
            "to": [{"email": to}],
            "subject": subject,
            "text": text,
            "track_opens": False,
            "track_clicks": False,
        }
        if reply_to:
            message["headers"] = {"reply-to": reply_to}

        try:
            results = self.client.messages.send({"message": message})
        except ApiClientError as exc:
            raise EmailDeliveryError(f"Email provider error: {exc.text}") from exc

        if isinstance(results, list):
            for result in results:
                status = str(result.get("status", "")).lower()
                if status in _FAILED_STATUSES:
                    reason = result.get("reject_reason") or status
                    raise EmailDeliveryError(f"Email to {to} was {status}: {reason}")
        logger.info("Sent email %r to %s", subject, to)
