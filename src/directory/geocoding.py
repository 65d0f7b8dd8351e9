"""
Free-text location lookup against the Mapbox geocoding API.
A lookup that finds nothing returns None; transport or provider failures raise
GeocodingUnavailableError so callers can tell "no such place" apart from "could not ask".
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

from src.directory.geo import GeoPoint

logger = logging.getLogger(__name__)

LOOKUP_ATTEMPTS = 2


class GeocodingUnavailableError(RuntimeError):
    """Raised when the geocoding provider cannot be reached or rejects the request."""


class MapboxGeocoder:
    def __init__(
        self,
        *,
        access_token: str,
        base_url: str = "https://api.mapbox.com/geocoding/v5/mapbox.places",
        timeout_seconds: int = 5,
        country: str = "us",
        session: requests.Session | None = None,
    ) -> None:
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.country = country
        self.session = session or requests.Session()

    def geocode(self, query: str) -> GeoPoint | None:
        """Resolve `query` to the best-matching point, or None when nothing matches."""

        text = query.strip()
        if not text:
            return None

        payload = self._request_json(text)
        features = payload.get("features") or []
        if not features:
            logger.info("No geocoding match for %r", text)
            return None

        center = features[0].get("center")
        if not isinstance(center, list) or len(center) != 2:
            raise GeocodingUnavailableError(f"Unexpected geocoding result shape for {text!r}")
        # Mapbox orders coordinates as [longitude, latitude].
        longitude, latitude = center
        return GeoPoint(latitude=float(latitude), longitude=float(longitude))

    def _request_json(self, text: str) -> dict[str, Any]:
        url = f"{self.base_url}/{quote(text, safe='')}.json"
        params = {"access_token": self.access_token, "country": self.country, "limit": 1}

        last_error: Exception | None = None
        for attempt in range(1, LOOKUP_ATTEMPTS + 1):
            try:
                response = self.session.get(url, params=params, timeout=self.timeout_seconds)
            except requests.RequestException as exc:
                last_error = exc
                logger.warning(
                    "Geocoding request failed (attempt %d/%d): %s", attempt, LOOKUP_ATTEMPTS, exc
                )
                continue

            if response.status_code >= 500:
                last_error = GeocodingUnavailableError(
                    f"Geocoding provider returned status {response.status_code}"
                )
                logger.warning(
                    "Geocoding provider error (attempt %d/%d): status %d",
                    attempt,
                    LOOKUP_ATTEMPTS,
                    response.status_code,
                )
                continue
            if response.status_code >= 400:
                raise GeocodingUnavailableError(
                    f"Geocoding request was rejected with status {response.status_code}"
                )

            try:
                payload = response.json()
            except ValueError as exc:
                raise GeocodingUnavailableError("Geocoding provider did not return valid JSON") from exc
            if not isinstance(payload, dict):
                raise GeocodingUnavailableError("Unexpected geocoding payload shape")
            return payload

        raise GeocodingUnavailableError(f"Geocoding lookup failed: {last_error}") from last_error
