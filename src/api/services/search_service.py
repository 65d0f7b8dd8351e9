# This file implements the directory search behind the map and list views.
# A search location comes from explicit coordinates or from geocoding free text. With a location,
# listings are limited to the radius and ordered nearest first; without one (browse mode) companies
# are ordered by paid tier and facilities keep their stored order.

from __future__ import annotations

import logging
from typing import Any, Literal

from src.api.error_handlers import ValidationError
from src.api.fallback import SOURCE_DATABASE, SOURCE_FALLBACK
from src.api.services.listing_service import ListingService
from src.directory.geo import GeoPoint
from src.directory.geo_filter import filter_within_radius, validate_radius
from src.directory.geocoding import GeocodingUnavailableError, MapboxGeocoder
from src.directory.tier_ranking import rank_by_tier
from src.directory.transforms import transform_companies, transform_facilities

logger = logging.getLogger(__name__)

ListingType = Literal["all", "companies", "disposals"]

LOCATION_RESOLVED = "resolved"
LOCATION_NOT_FOUND = "not_found"
LOCATION_UNAVAILABLE = "unavailable"
LOCATION_NOT_REQUESTED = "not_requested"


class SearchService:
    def __init__(
        self,
        *,
        listings: ListingService,
        geocoder: MapboxGeocoder | None,
        default_radius: int,
    ) -> None:
        self.listings = listings
        self.geocoder = geocoder
        self.default_radius = default_radius

    def search(
        self,
        *,
        query: str | None = None,
        latitude: float | None = None,
        longitude: float | None = None,
        radius: int | None = None,
        listing_type: ListingType = "all",
    ) -> dict[str, Any]:
        """Return `{"data": {...}, "source": ..., "warnings": [...]}` for one search request."""

        try:
            radius_miles = validate_radius(radius, default=self.default_radius)
        except ValueError as exc:
            raise ValidationError({"radius": str(exc)}) from exc

        warnings: list[str] = []
        center, status = self._resolve_location(
            query=query, latitude=latitude, longitude=longitude, warnings=warnings
        )

        sources: list[str] = []
        companies: list[dict[str, Any]] = []
        facilities: list[dict[str, Any]] = []

        if listing_type in ("all", "companies"):
            resolved = self.listings.list_companies_for_map()
            sources.append(resolved.source)
            companies = filter_within_radius(transform_companies(resolved.value), center, radius_miles)
            if center is None:
                companies = rank_by_tier(companies)

        if listing_type in ("all", "disposals"):
            resolved = self.listings.list_facilities()
            sources.append(resolved.source)
            facilities = filter_within_radius(
                transform_facilities(resolved.value), center, radius_miles
            )

        source = SOURCE_FALLBACK if SOURCE_FALLBACK in sources else SOURCE_DATABASE
        if source == SOURCE_FALLBACK:
            warnings.append("Showing bundled directory data; live listings are unavailable.")

        return {
            "data": {
                "location": {
                    "query": query.strip() if query and query.strip() else None,
                    "latitude": center.latitude if center else None,
                    "longitude": center.longitude if center else None,
                    "radius_miles": radius_miles,
                    "status": status,
                },
                "companies": companies,
                "facilities": facilities,
            },
            "source": source,
            "warnings": warnings or None,
        }

    def _resolve_location(
        self,
        *,
        query: str | None,
        latitude: float | None,
        longitude: float | None,
        warnings: list[str],
    ) -> tuple[GeoPoint | None, str]:
        if (latitude is None) != (longitude is None):
            missing = "longitude" if longitude is None else "latitude"
            raise ValidationError({missing: "latitude and longitude must be provided together."})
        if latitude is not None and longitude is not None:
            return GeoPoint(latitude=latitude, longitude=longitude), LOCATION_RESOLVED

        text = (query or "").strip()
        if not text:
            return None, LOCATION_NOT_REQUESTED

        if self.geocoder is None:
            warnings.append("Location search is not configured; showing all listings.")
            return None, LOCATION_UNAVAILABLE
        try:
            point = self.geocoder.geocode(text)
        except GeocodingUnavailableError as exc:
            logger.warning("Geocoding unavailable for %r: %s", text, exc)
            warnings.append("Location search is temporarily unavailable; showing all listings.")
            return None, LOCATION_UNAVAILABLE

        if point is None:
            warnings.append(f"No location matched {text!r}; showing all listings.")
            return None, LOCATION_NOT_FOUND
        return point, LOCATION_RESOLVED
