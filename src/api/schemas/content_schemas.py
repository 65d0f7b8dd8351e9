# This file defines schemas for editable site content: state landing pages, pricing tiers,
# homepage hero content and the two image slideshows.
# Image lists are accepted as-is and cleaned by the service; single slideshow URLs are validated strictly.

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from src.api.schemas.common import EnvelopeFields


class StatePageRecord(BaseModel):
    id: int
    state: str
    header: str | None = None
    description: str | None = None
    logo_url: str | None = None
    images: list[str] = Field(default_factory=list)


class StatePageCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    state: str = Field(min_length=1, max_length=64)
    header: str | None = None
    description: str | None = None
    logo_url: str | None = None
    images: list[str] = Field(default_factory=list)


class StatePageUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    state: str | None = Field(default=None, min_length=1, max_length=64)
    header: str | None = None
    description: str | None = None
    logo_url: str | None = None
    images: list[str] | None = None


class PricingTierRecord(BaseModel):
    id: int
    name: str
    monthly: int
    annual: int
    sort_order: int


class PricingTierCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=128)
    monthly: int = Field(ge=0)
    annual: int = Field(ge=0)
    sort_order: int = 0


class PricingTierUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=128)
    monthly: int | None = Field(default=None, ge=0)
    annual: int | None = Field(default=None, ge=0)
    sort_order: int | None = None


class HomepageRecord(BaseModel):
    id: int | None = None
    hero_title: str
    hero_subtitle: str
    main_image: str | None = None
    slideshow_enabled: bool = False


class HomepageUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    hero_title: str | None = Field(default=None, min_length=1)
    hero_subtitle: str | None = Field(default=None, min_length=1)
    main_image: str | None = None
    slideshow_enabled: bool | None = None


class HomepageSlideRecord(BaseModel):
    id: int
    image_url: str
    caption: str | None = None


class HomepageSlideCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    image_url: str
    caption: str | None = None


class DisposalSlideRecord(BaseModel):
    id: int
    state: str | None = None
    image_url: str
    title: str | None = None


class DisposalSlideCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    state: str | None = None
    image_url: str
    title: str | None = None


class StatePageListResponse(EnvelopeFields):
    data: list[StatePageRecord]


class StatePageResponse(EnvelopeFields):
    data: StatePageRecord


class PricingTierListResponse(EnvelopeFields):
    data: list[PricingTierRecord]


class PricingTierResponse(EnvelopeFields):
    data: PricingTierRecord


class HomepageResponse(EnvelopeFields):
    data: HomepageRecord


class HomepageSlideListResponse(EnvelopeFields):
    data: list[HomepageSlideRecord]


class HomepageSlideResponse(EnvelopeFields):
    data: HomepageSlideRecord


class DisposalSlideListResponse(EnvelopeFields):
    data: list[DisposalSlideRecord]


class DisposalSlideResponse(EnvelopeFields):
    data: DisposalSlideRecord
