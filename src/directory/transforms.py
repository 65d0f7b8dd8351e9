"""
Shaping of persisted directory records into the public listing format.
This is the single place where records without coordinates are discarded; map and search views
consume only what these functions emit.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any, Final

from src.directory.tier_ranking import DISPOSAL_PIN_COLOR, TIER_PIN_COLORS, normalize_tier

DEFAULT_COVERAGE_RADIUS_MILES: Final[int] = 100
DEFAULT_SPECIALTIES: Final[tuple[str, ...]] = ("Hydro Excavation",)
FACILITY_TIER: Final[str] = "verified"

STATE_ABBR_TO_NAME: Final[dict[str, str]] = {
    "AL": "Alabama", "AK": "Alaska", "AZ": "Arizona", "AR": "Arkansas",
    "CA": "California", "CO": "Colorado", "CT": "Connecticut", "DE": "Delaware",
    "FL": "Florida", "GA": "Georgia", "HI": "Hawaii", "ID": "Idaho",
    "IL": "Illinois", "IN": "Indiana", "IA": "Iowa", "KS": "Kansas",
    "KY": "Kentucky", "LA": "Louisiana", "ME": "Maine", "MD": "Maryland",
    "MA": "Massachusetts", "MI": "Michigan", "MN": "Minnesota", "MS": "Mississippi",
    "MO": "Missouri", "MT": "Montana", "NE": "Nebraska", "NV": "Nevada",
    "NH": "New Hampshire", "NJ": "New Jersey", "NM": "New Mexico", "NY": "New York",
    "NC": "North Carolina", "ND": "North Dakota", "OH": "Ohio", "OK": "Oklahoma",
    "OR": "Oregon", "PA": "Pennsylvania", "RI": "Rhode Island", "SC": "South Carolina",
    "SD": "South Dakota", "TN": "Tennessee", "TX": "Texas", "UT": "Utah",
    "VT": "Vermont", "VA": "Virginia", "WA": "Washington", "WV": "West Virginia",
    "WI": "Wisconsin", "WY": "Wyoming", "DC": "District of Columbia",
    "BC": "British Columbia", "AB": "Alberta", "SK": "Saskatchewan", "MB": "Manitoba",
    "ON": "Ontario", "QC": "Quebec", "NB": "New Brunswick", "NS": "Nova Scotia",
    "PE": "Prince Edward Island", "NL": "Newfoundland and Labrador",
}

_STATE_ABBR_RE = re.compile(r"^([A-Za-z]{2})\b")


def split_delimited(value: str | None, *, delimiter: str = ",") -> list[str]:
    """Split a delimited field into trimmed, non-empty, de-duplicated tokens."""

    if not value:
        return []
    tokens: list[str] = []
    seen: set[str] = set()
    for segment in value.split(delimiter):
        token = segment.strip()
        if token and token not in seen:
            seen.add(token)
            tokens.append(token)
    return tokens


def join_delimited(values: str | Iterable[str] | None) -> str | None:
    """Store a list (or an already-delimited string) as a single comma-separated field."""

    if values is None:
        return None
    if isinstance(values, str):
        tokens = split_delimited(values)
    else:
        tokens = split_delimited(",".join(str(value) for value in values))
    return ", ".join(tokens) or None


def transform_company(record: Mapping[str, Any]) -> dict[str, Any] | None:
    """Return the public company listing, or None when the record has no coordinates."""

    latitude = record.get("latitude")
    longitude = record.get("longitude")
    if latitude is None or longitude is None:
        return None

    raw_specialties = record.get("specialties")
    specialties = split_delimited(raw_specialties) if raw_specialties else list(DEFAULT_SPECIALTIES)
    tier = normalize_tier(record.get("tier"))

    return {
        "id": str(record["id"]),
        "name": record["name"],
        "city": record.get("city") or "",
        "state": record.get("state") or "",
        "address": record.get("address") or "",
        "phone": record.get("phone") or "",
        "website": record.get("website") or "",
        "email": record.get("email") or "",
        "service_specialties": specialties,
        "coverage_radius": record.get("coverage_radius") or DEFAULT_COVERAGE_RADIUS_MILES,
        "union_affiliation": bool(record.get("union_affiliated")),
        "tier": tier,
        "pin_color": TIER_PIN_COLORS[tier],
        "latitude": float(latitude),
        "longitude": float(longitude),
    }


def transform_facility(record: Mapping[str, Any]) -> dict[str, Any] | None:
    """Return the public disposal facility listing, or None when coordinates are missing."""

    latitude = record.get("latitude")
    longitude = record.get("longitude")
    if latitude is None or longitude is None:
        return None

    return {
        "id": str(record["id"]),
        "name": record["name"],
        "address": record.get("address") or "",
        "city": record.get("city") or "",
        "state": record.get("state") or "",
        "materials_accepted": split_delimited(record.get("materials_accepted")),
        "hours": record.get("hours") or "",
        "phone": record.get("phone") or "",
        "tier": FACILITY_TIER,
        "pin_color": DISPOSAL_PIN_COLOR,
        "latitude": float(latitude),
        "longitude": float(longitude),
    }


def transform_companies(records: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    return [listing for listing in map(transform_company, records) if listing is not None]


def transform_facilities(records: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    return [listing for listing in map(transform_facility, records) if listing is not None]


def parse_city_state(address: str | None) -> tuple[str | None, str | None]:
    """Extract (city, full state name) from `Street, City, ST ZIP, Country` style addresses."""

    if not address or not address.strip():
        return None, None

    parts = [part.strip() for part in address.split(",")]
    if len(parts) >= 3:
        city = parts[-3] or None
        state_zip = parts[-2]
        match = _STATE_ABBR_RE.match(state_zip)
        abbreviation = match.group(1).upper() if match else ""
        state = STATE_ABBR_TO_NAME.get(abbreviation) or (state_zip.split(" ")[0] or None)
        return city, state
    if len(parts) == 2:
        return parts[0] or None, parts[1] or None
    return None, None
