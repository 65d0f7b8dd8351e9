"""SQLAlchemy ORM models for directory listings and site content."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class Base(DeclarativeBase):
    """Declarative base for all directory tables."""

    pass


class Company(Base):
    __tablename__ = "companies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(128), nullable=False)
    state: Mapped[str] = mapped_column(String(64), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(64))
    website: Mapped[str | None] = mapped_column(Text)
    email: Mapped[str | None] = mapped_column(String(255))
    address: Mapped[str | None] = mapped_column(Text)
    tier: Mapped[str] = mapped_column(String(32), nullable=False, default="basic")
    coverage_radius: Mapped[int | None] = mapped_column(Integer)
    latitude: Mapped[float | None] = mapped_column(Float)
    longitude: Mapped[float | None] = mapped_column(Float)
    union_affiliated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    specialties: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utc_now
    )

    images: Mapped[list[CompanyImage]] = relationship(
        back_populates="company",
        cascade="all, delete-orphan",
        order_by="CompanyImage.id",
    )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "city": self.city,
            "state": self.state,
            "phone": self.phone,
            "website": self.website,
            "email": self.email,
            "address": self.address,
            "tier": self.tier,
            "coverage_radius": self.coverage_radius,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "union_affiliated": self.union_affiliated,
            "specialties": self.specialties,
            "created_at": self.created_at,
            "images": [image.image_url for image in self.images],
        }


class CompanyImage(Base):
    __tablename__ = "company_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    company_id: Mapped[int] = mapped_column(
        ForeignKey("companies.id", ondelete="CASCADE"), nullable=False
    )
    image_url: Mapped[str] = mapped_column(Text, nullable=False)

    company: Mapped[Company] = relationship(back_populates="images")


class DisposalFacility(Base):
    __tablename__ = "disposal_facilities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(Text)
    city: Mapped[str | None] = mapped_column(String(128))
    state: Mapped[str | None] = mapped_column(String(64))
    phone: Mapped[str | None] = mapped_column(String(64))
    hours: Mapped[str | None] = mapped_column(Text)
    latitude: Mapped[float | None] = mapped_column(Float)
    longitude: Mapped[float | None] = mapped_column(Float)
    materials_accepted: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utc_now
    )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "phone": self.phone,
            "hours": self.hours,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "materials_accepted": self.materials_accepted,
            "created_at": self.created_at,
        }


class StateLandingPage(Base):
    __tablename__ = "state_landing_pages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    state: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    header: Mapped[str | None] = mapped_column(Text)
    description: Mapped[str | None] = mapped_column(Text)
    logo_url: Mapped[str | None] = mapped_column(Text)

    images: Mapped[list[StateLandingImage]] = relationship(
        back_populates="page",
        cascade="all, delete-orphan",
        order_by="StateLandingImage.id",
    )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "state": self.state,
            "header": self.header,
            "description": self.description,
            "logo_url": self.logo_url,
            "images": [image.image_url for image in self.images],
        }


class StateLandingImage(Base):
    __tablename__ = "state_landing_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    page_id: Mapped[int] = mapped_column(
        ForeignKey("state_landing_pages.id", ondelete="CASCADE"), nullable=False
    )
    image_url: Mapped[str] = mapped_column(Text, nullable=False)

    page: Mapped[StateLandingPage] = relationship(back_populates="images")


class PricingTier(Base):
    __tablename__ = "pricing_tiers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    monthly: Mapped[int] = mapped_column(Integer, nullable=False)
    annual: Mapped[int] = mapped_column(Integer, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "monthly": self.monthly,
            "annual": self.annual,
            "sort_order": self.sort_order,
        }


class HomepageContent(Base):
    __tablename__ = "homepage_content"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    hero_title: Mapped[str] = mapped_column(Text, nullable=False)
    hero_subtitle: Mapped[str] = mapped_column(Text, nullable=False)
    main_image: Mapped[str | None] = mapped_column(Text)
    slideshow_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "hero_title": self.hero_title,
            "hero_subtitle": self.hero_subtitle,
            "main_image": self.main_image,
            "slideshow_enabled": self.slideshow_enabled,
        }


class HomepageSlideshowImage(Base):
    __tablename__ = "homepage_slideshow_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    caption: Mapped[str | None] = mapped_column(Text)

    def to_record(self) -> dict[str, Any]:
        return {"id": self.id, "image_url": self.image_url, "caption": self.caption}


class DisposalSlideshowImage(Base):
    __tablename__ = "disposal_slideshow_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    state: Mapped[str | None] = mapped_column(String(64))
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str | None] = mapped_column(Text)

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "state": self.state,
            "image_url": self.image_url,
            "title": self.title,
        }
