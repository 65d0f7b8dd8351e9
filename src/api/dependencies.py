# This file provides dependency factories for FastAPI routes and middleware.
# It exists so services are created once and shared through dependency injection.
# Optional collaborators (datastore, Stripe, geocoder, mailer) resolve to None when unconfigured,
# and the services decide how that absence is reported.

from __future__ import annotations

from functools import lru_cache

from src.api.api_config import ApiConfig, get_api_config
from src.api.db_access import DatabaseClient
from src.api.fallback import FallbackResolver
from src.api.mailer import MailchimpMailer
from src.api.payment_gateway import StripeGateway
from src.api.services.admin_service import AdminService
from src.api.services.content_service import ContentService
from src.api.services.import_service import ImportService
from src.api.services.listing_service import ListingService
from src.api.services.payment_service import PaymentService
from src.api.services.referral_service import ReferralService
from src.api.services.search_service import SearchService
from src.directory.geocoding import MapboxGeocoder


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient | None:
    config = get_api_config()
    if not config.database_configured or not config.database_url:
        return None
    return DatabaseClient(
        database_url=config.database_url,
        connect_timeout_seconds=config.database_connect_timeout_seconds,
    )


@lru_cache(maxsize=1)
def get_fallback_resolver() -> FallbackResolver:
    config = get_api_config()
    return FallbackResolver(
        database_configured=config.database_configured,
        db=get_database_client(),
    )


@lru_cache(maxsize=1)
def get_geocoder() -> MapboxGeocoder | None:
    config = get_api_config()
    if not config.mapbox_access_token:
        return None
    return MapboxGeocoder(
        access_token=config.mapbox_access_token,
        base_url=config.geocoding_base_url,
        timeout_seconds=config.geocoding_timeout_seconds,
    )


@lru_cache(maxsize=1)
def get_stripe_gateway() -> StripeGateway | None:
    config = get_api_config()
    if not config.stripe_secret_key:
        return None
    return StripeGateway(api_key=config.stripe_secret_key)


@lru_cache(maxsize=1)
def get_mailer() -> MailchimpMailer | None:
    config = get_api_config()
    if not config.mailchimp_api_key:
        return None
    return MailchimpMailer(
        api_key=config.mailchimp_api_key,
        from_email=config.email_from_address,
        from_name=config.email_from_name,
    )


@lru_cache(maxsize=1)
def get_listing_service() -> ListingService:
    return ListingService(resolver=get_fallback_resolver())


@lru_cache(maxsize=1)
def get_content_service() -> ContentService:
    return ContentService(resolver=get_fallback_resolver())


@lru_cache(maxsize=1)
def get_search_service() -> SearchService:
    config = get_api_config()
    return SearchService(
        listings=get_listing_service(),
        geocoder=get_geocoder(),
        default_radius=config.default_search_radius,
    )


@lru_cache(maxsize=1)
def get_payment_service() -> PaymentService:
    config = get_api_config()
    return PaymentService(
        config=config,
        gateway=get_stripe_gateway(),
        resolver=get_fallback_resolver(),
    )


@lru_cache(maxsize=1)
def get_referral_service() -> ReferralService:
    return ReferralService(config=get_api_config(), mailer=get_mailer())


@lru_cache(maxsize=1)
def get_admin_service() -> AdminService:
    return AdminService(config=get_api_config())


@lru_cache(maxsize=1)
def get_import_service() -> ImportService:
    return ImportService(resolver=get_fallback_resolver())


def get_config() -> ApiConfig:
    return get_api_config()
