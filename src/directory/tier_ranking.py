"""
Paid-tier ordering for company listings.
Ranking uses Python's stable sort, so listings of the same tier keep their input order.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Final, TypeVar

TIER_RANK: Final[dict[str, int]] = {
    "premium": 0,
    "featured": 1,
    "verified": 2,
    "basic": 3,
}
DEFAULT_TIER: Final[str] = "basic"

TIER_PIN_COLORS: Final[dict[str, str]] = {
    "basic": "#9CA3AF",
    "verified": "#3B82F6",
    "featured": "#22C55E",
    "premium": "#EAB308",
}
DISPOSAL_PIN_COLOR: Final[str] = "#22C55E"

ListingT = TypeVar("ListingT", bound=Mapping[str, Any])


def normalize_tier(tier: str | None) -> str:
    """Lower-case a stored tier; anything unrecognized (e.g. legacy `free`) becomes basic."""

    normalized = (tier or "").strip().lower()
    return normalized if normalized in TIER_RANK else DEFAULT_TIER


def tier_rank(tier: str | None) -> int:
    return TIER_RANK[normalize_tier(tier)]


def rank_by_tier(listings: Iterable[ListingT]) -> list[ListingT]:
    """Order listings premium → featured → verified → basic, preserving ties."""

    return sorted(listings, key=lambda listing: tier_rank(listing.get("tier")))
