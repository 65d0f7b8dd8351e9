# This file implements the shared-password admin login.
# The comparison is constant-time; the session itself is a client-side flag, so this only gates the UI.

from __future__ import annotations

import hmac
import logging
from typing import Any

from src.api.api_config import ApiConfig
from src.api.error_handlers import APIError, NotConfiguredError, ValidationError

logger = logging.getLogger(__name__)


def passwords_match(candidate: str, expected: str) -> bool:
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


class AdminService:
    def __init__(self, *, config: ApiConfig) -> None:
        self.config = config

    def login(self, password: Any) -> dict[str, Any]:
        if not self.config.admin_password:
            logger.error("ADMIN_PASSWORD is not set; admin login is disabled")
            raise NotConfiguredError(
                "Admin authentication is not configured.", error_code="ADMIN_NOT_CONFIGURED"
            )
        if not isinstance(password, str):
            raise ValidationError({"password": "Password must be a string."})
        if not passwords_match(password, self.config.admin_password):
            raise APIError(
                status_code=401, error_code="INVALID_PASSWORD", message="Invalid password."
            )
        return {"success": True}
