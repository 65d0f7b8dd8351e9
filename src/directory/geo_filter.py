"""
Radius filtering and distance ordering for directory search results.
Entities are plain mappings carrying `latitude` and `longitude`; filtered entities are copied
and annotated with `distance_miles` so callers never see mutated inputs.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Final

from src.directory.geo import GeoPoint, haversine_miles

SEARCH_RADII_MILES: Final[tuple[int, ...]] = (25, 50, 75, 100)
DEFAULT_SEARCH_RADIUS_MILES: Final[int] = 50


def validate_radius(value: int | None, *, default: int = DEFAULT_SEARCH_RADIUS_MILES) -> int:
    """Return the radius if it is one of the supported options, otherwise raise ValueError."""

    if value is None:
        value = default
    if isinstance(value, bool) or value not in SEARCH_RADII_MILES:
        supported = ", ".join(str(radius) for radius in SEARCH_RADII_MILES)
        raise ValueError(f"radius must be one of {supported} miles, got {value!r}")
    return int(value)


def has_coordinates(entity: Mapping[str, Any]) -> bool:
    return entity.get("latitude") is not None and entity.get("longitude") is not None


def point_of(entity: Mapping[str, Any]) -> GeoPoint:
    return GeoPoint(latitude=float(entity["latitude"]), longitude=float(entity["longitude"]))


def filter_within_radius(
    entities: Iterable[Mapping[str, Any]],
    center: GeoPoint | None,
    radius_miles: float,
) -> list[dict[str, Any]]:
    """Keep entities within `radius_miles` of `center`, nearest first.

    With no center the located entities are returned in their original order, unfiltered
    and without distances. Entities lacking coordinates are dropped in both modes.
    """

    located = [dict(entity) for entity in entities if has_coordinates(entity)]
    if center is None:
        return located

    matches: list[dict[str, Any]] = []
    for entity in located:
        distance = haversine_miles(center, point_of(entity))
        # NaN fails this comparison, so malformed coordinates never match.
        if distance <= radius_miles:
            entity["distance_miles"] = distance
            matches.append(entity)

    matches.sort(key=lambda entity: entity["distance_miles"])
    return matches
