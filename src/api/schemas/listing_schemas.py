# This file defines request and response schemas for company and disposal facility records.
# Create bodies require the identifying fields; update bodies are partial and only touch what is sent.
# Specialties and accepted materials may be sent either as a list or as one comma-separated string.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.api.schemas.common import EnvelopeFields
from src.directory.tier_ranking import TIER_RANK


def _known_tier(value: str | None) -> str | None:
    if value is None:
        return None
    tier = value.strip().lower()
    if tier not in TIER_RANK:
        raise ValueError(f"tier must be one of: {', '.join(TIER_RANK)}")
    return tier


class CompanyRecord(BaseModel):
    id: int
    name: str
    city: str
    state: str
    phone: str | None = None
    website: str | None = None
    email: str | None = None
    address: str | None = None
    tier: str
    coverage_radius: int | None = None
    latitude: float | None = None
    longitude: float | None = None
    union_affiliated: bool = False
    specialties: str | None = None
    created_at: datetime | None = None
    images: list[str] = Field(default_factory=list)


class CompanyCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=128)
    state: str = Field(min_length=1, max_length=64)
    phone: str | None = None
    website: str | None = None
    email: str | None = None
    address: str | None = None
    tier: str = "basic"
    coverage_radius: int | None = Field(default=None, ge=1)
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    union_affiliated: bool = False
    specialties: list[str] | str | None = None
    images: list[str] = Field(default_factory=list)

    @field_validator("tier")
    @classmethod
    def check_tier(cls, value: str | None) -> str | None:
        return _known_tier(value)


class CompanyUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    city: str | None = Field(default=None, min_length=1, max_length=128)
    state: str | None = Field(default=None, min_length=1, max_length=64)
    phone: str | None = None
    website: str | None = None
    email: str | None = None
    address: str | None = None
    tier: str | None = None
    coverage_radius: int | None = Field(default=None, ge=1)
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    union_affiliated: bool | None = None
    specialties: list[str] | str | None = None
    images: list[str] | None = None

    @field_validator("tier")
    @classmethod
    def check_tier(cls, value: str | None) -> str | None:
        return _known_tier(value)


class FacilityRecord(BaseModel):
    id: int
    name: str
    address: str | None = None
    city: str | None = None
    state: str | None = None
    phone: str | None = None
    hours: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    materials_accepted: str | None = None
    created_at: datetime | None = None


class FacilityCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=255)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    phone: str | None = None
    hours: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    materials_accepted: list[str] | str | None = None


class FacilityUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    phone: str | None = None
    hours: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    materials_accepted: list[str] | str | None = None


class CompanyListResponse(EnvelopeFields):
    data: list[CompanyRecord]


class CompanyResponse(EnvelopeFields):
    data: CompanyRecord


class FacilityListResponse(EnvelopeFields):
    data: list[FacilityRecord]


class FacilityResponse(EnvelopeFields):
    data: FacilityRecord
