"""
Bundled directory dataset.
The JSON files under `data/` back two things: the read fallback used when no datastore is
configured, and the one-shot import that seeds a fresh database. Both go through the same
row conversion so a fallback response has exactly the shape of a live one.
"""

from __future__ import annotations

import json
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Any, Final

from src.directory.tier_ranking import normalize_tier
from src.directory.transforms import join_delimited, parse_city_state
from src.directory.validation import is_valid_url

DATA_DIR: Final[Path] = Path(__file__).resolve().parent / "data"
COMPANIES_EXPORT_PATH: Final[Path] = DATA_DIR / "companies_export.json"
DISPOSAL_FACILITIES_PATH: Final[Path] = DATA_DIR / "disposal_facilities.json"

DEFAULT_HOMEPAGE: Final[dict[str, Any]] = {
    "id": None,
    "hero_title": "Find Hydro-Vac Services Near You",
    "hero_subtitle": "Connect with trusted hydro excavation companies across the nation",
    "main_image": None,
    "slideshow_enabled": False,
}

# Single-state list prices, in whole dollars.
DEFAULT_PRICING_TIERS: Final[tuple[dict[str, Any], ...]] = (
    {"id": 1, "name": "Verified", "monthly": 100, "annual": 1000, "sort_order": 1},
    {"id": 2, "name": "Featured", "monthly": 125, "annual": 1250, "sort_order": 2},
    {"id": 3, "name": "Premium", "monthly": 150, "annual": 1500, "sort_order": 3},
)


def _read_json(path: Path) -> list[dict[str, Any]]:
    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array in {path}")
    return payload


@lru_cache(maxsize=1)
def _company_export_rows() -> tuple[dict[str, Any], ...]:
    return tuple(_read_json(COMPANIES_EXPORT_PATH))


@lru_cache(maxsize=1)
def _facility_rows() -> tuple[dict[str, Any], ...]:
    return tuple(_read_json(DISPOSAL_FACILITIES_PATH))


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def company_record_from_export(row: dict[str, Any]) -> dict[str, Any] | None:
    """Convert one export row into a company record; None when name or city/state is missing."""

    name = (row.get("name") or "").strip()
    city, state = parse_city_state(row.get("address"))
    if not name or not city or not state:
        return None

    return {
        "id": row.get("id"),
        "name": name,
        "city": city,
        "state": state,
        "phone": row.get("phone"),
        "website": row.get("website"),
        "email": row.get("email"),
        "address": row.get("address"),
        "tier": normalize_tier(row.get("tier")),
        "coverage_radius": None,
        "latitude": row.get("lat"),
        "longitude": row.get("lng"),
        "union_affiliated": bool(row.get("is_union")),
        "specialties": join_delimited(row.get("services")),
        "created_at": _parse_timestamp(row.get("created_at")),
        "images": [],
    }


def importable_companies() -> list[dict[str, Any]]:
    """Company records eligible for import, in export-file order.

    A row qualifies with a valid website, a parseable location and a name+state not seen earlier.
    """

    records: list[dict[str, Any]] = []
    seen: set[tuple[str, str]] = set()
    for row in _company_export_rows():
        if not row.get("website") or not is_valid_url(row["website"]):
            continue
        record = company_record_from_export(row)
        if record is None:
            continue
        key = (record["name"].lower(), record["state"].lower())
        if key in seen:
            continue
        seen.add(key)
        records.append(record)
    return records


def facility_record_from_seed(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": row.get("id"),
        "name": row["name"],
        "address": row.get("address"),
        "city": row.get("city"),
        "state": row.get("state"),
        "phone": row.get("phone"),
        "hours": row.get("hours"),
        "latitude": row.get("latitude"),
        "longitude": row.get("longitude"),
        "materials_accepted": join_delimited(row.get("materials_accepted")),
        "created_at": None,
    }


def fallback_companies() -> list[dict[str, Any]]:
    """Companies as the admin list would return them, ordered by name."""

    return sorted(importable_companies(), key=lambda record: record["name"])


def fallback_facilities() -> list[dict[str, Any]]:
    return [facility_record_from_seed(row) for row in _facility_rows()]


def fallback_pricing_tiers() -> list[dict[str, Any]]:
    return [dict(tier) for tier in DEFAULT_PRICING_TIERS]


def fallback_homepage() -> dict[str, Any]:
    return dict(DEFAULT_HOMEPAGE)
