# This file defines the response contract for the map/list search endpoint.
# Listings are the public shape produced by the directory transforms; `distance_miles` is present
# only when a search location was resolved.

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from src.api.schemas.common import EnvelopeFields

LocationStatus = Literal["resolved", "not_found", "unavailable", "not_requested"]


class CompanyListing(BaseModel):
    id: str
    name: str
    city: str
    state: str
    address: str
    phone: str
    website: str
    email: str
    service_specialties: list[str]
    coverage_radius: int
    union_affiliation: bool
    tier: str
    pin_color: str
    latitude: float
    longitude: float
    distance_miles: float | None = None


class FacilityListing(BaseModel):
    id: str
    name: str
    address: str
    city: str
    state: str
    materials_accepted: list[str]
    hours: str
    phone: str
    tier: str
    pin_color: str
    latitude: float
    longitude: float
    distance_miles: float | None = None


class SearchLocation(BaseModel):
    query: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    radius_miles: int
    status: LocationStatus


class ListingSearchResult(BaseModel):
    location: SearchLocation
    companies: list[CompanyListing]
    facilities: list[FacilityListing]


class ListingSearchResponse(EnvelopeFields):
    data: ListingSearchResult
