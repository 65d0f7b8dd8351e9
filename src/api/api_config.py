# This file defines runtime settings for the API layer in one place.
# The loader reads environment variables once and the resulting ApiConfig is injected into handlers,
# so no request path inspects the environment on its own.
# Whether the datastore is configured is decided here and carried as a plain boolean.

from __future__ import annotations

import os
import re
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.directory.geo_filter import DEFAULT_SEARCH_RADIUS_MILES, SEARCH_RADII_MILES

_PREFIX_RE = re.compile(r"^/[a-zA-Z0-9_\-/]*$")


class ApiConfig(BaseModel):
    """Typed API runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    api_name: str = "HydroVac Finder API"
    api_prefix: str = "/api"
    schema_version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8000
    environment: str = "local"
    app_version: str = "0.1.0"
    allowed_origins: list[str] = Field(default_factory=list)
    site_origin: str = "http://localhost:3000"
    enable_request_logging: bool = False

    database_url: str | None = None
    direct_url: str | None = None
    database_configured: bool = False
    database_connect_timeout_seconds: int = 5

    stripe_secret_key: str | None = None
    stripe_webhook_secret: str | None = None

    mapbox_access_token: str | None = None
    geocoding_base_url: str = "https://api.mapbox.com/geocoding/v5/mapbox.places"
    geocoding_timeout_seconds: int = 5

    mailchimp_api_key: str | None = None
    email_from_address: str = "noreply@hydrovacfinder.com"
    email_from_name: str = "HydroVac Finder"
    referral_recipient: str = "ap@hydrovacfinder.com"

    admin_password: str | None = None
    default_search_radius: int = DEFAULT_SEARCH_RADIUS_MILES

    @field_validator("api_prefix")
    @classmethod
    def validate_api_prefix(cls, value: str) -> str:
        if not _PREFIX_RE.match(value):
            raise ValueError("api_prefix must start with '/' and contain only path characters.")
        return value.rstrip("/") or "/api"

    @field_validator(
        "database_connect_timeout_seconds",
        "geocoding_timeout_seconds",
    )
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Value must be greater than 0.")
        return value

    @field_validator("default_search_radius")
    @classmethod
    def validate_default_radius(cls, value: int) -> int:
        if value not in SEARCH_RADII_MILES:
            raise ValueError(f"default_search_radius must be one of {SEARCH_RADII_MILES}.")
        return value

    @property
    def payments_configured(self) -> bool:
        return bool(self.stripe_secret_key)

    @property
    def geocoding_configured(self) -> bool:
        return bool(self.mapbox_access_token)

    @property
    def email_configured(self) -> bool:
        return bool(self.mailchimp_api_key)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"{name} must be boolean-like, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_list(name: str, default: list[str] | None = None) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default or [])
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_optional(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return raw.strip()


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Load API configuration from `.env` and process environment."""

    if load_env:
        load_dotenv()

    database_url = _env_optional("DATABASE_URL")
    direct_url = _env_optional("DIRECT_URL")

    config_values: dict[str, object] = {
        "api_name": os.getenv("API_NAME", "HydroVac Finder API"),
        "api_prefix": os.getenv("API_PREFIX", "/api"),
        "schema_version": os.getenv("API_SCHEMA_VERSION", "1.0.0"),
        "host": os.getenv("API_HOST", "0.0.0.0"),
        "port": _env_int("API_PORT", 8000),
        "environment": os.getenv("ENV", "local"),
        "app_version": os.getenv("APP_VERSION", "0.1.0"),
        "allowed_origins": _env_list("API_ALLOWED_ORIGINS", []),
        "site_origin": os.getenv("SITE_ORIGIN", "http://localhost:3000"),
        "enable_request_logging": _env_bool("API_ENABLE_REQUEST_LOGGING", False),
        "database_url": database_url,
        "direct_url": direct_url,
        # Both URLs are required: the pooled one serves queries, the direct one migrations.
        "database_configured": bool(database_url and direct_url),
        "database_connect_timeout_seconds": _env_int("DATABASE_CONNECT_TIMEOUT_SECONDS", 5),
        "stripe_secret_key": _env_optional("STRIPE_SECRET_KEY"),
        "stripe_webhook_secret": _env_optional("STRIPE_WEBHOOK_SECRET"),
        "mapbox_access_token": _env_optional("MAPBOX_ACCESS_TOKEN"),
        "geocoding_base_url": os.getenv(
            "GEOCODING_BASE_URL", "https://api.mapbox.com/geocoding/v5/mapbox.places"
        ),
        "geocoding_timeout_seconds": _env_int("GEOCODING_TIMEOUT_SECONDS", 5),
        "mailchimp_api_key": _env_optional("MAILCHIMP_API_KEY"),
        "email_from_address": os.getenv("EMAIL_FROM_ADDRESS", "noreply@hydrovacfinder.com"),
        "email_from_name": os.getenv("EMAIL_FROM_NAME", "HydroVac Finder"),
        "referral_recipient": os.getenv("REFERRAL_RECIPIENT", "ap@hydrovacfinder.com"),
        "admin_password": _env_optional("ADMIN_PASSWORD"),
        "default_search_radius": _env_int("DEFAULT_SEARCH_RADIUS", DEFAULT_SEARCH_RADIUS_MILES),
    }

    return ApiConfig.model_validate(config_values)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    """Cached accessor for API config."""

    return load_api_config()
