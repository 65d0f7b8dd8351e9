# This file implements services for editable site content.
# State landing pages fall back to an empty list (there is no bundled copy), pricing tiers to the
# published single-state prices, and homepage content to the default hero text.
# A single state page has no fallback at all, so it reports 503 when the datastore is absent.

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from src.api.error_handlers import NotFoundError, ValidationError
from src.api.fallback import FallbackResolver, Resolved
from src.api.schemas.content_schemas import (
    DisposalSlideCreate,
    HomepageSlideCreate,
    HomepageUpdate,
    PricingTierCreate,
    PricingTierUpdate,
    StatePageCreate,
    StatePageUpdate,
)
from src.directory import seed_data
from src.directory.models import (
    DisposalSlideshowImage,
    HomepageContent,
    HomepageSlideshowImage,
    PricingTier,
    StateLandingImage,
    StateLandingPage,
)
from src.directory.validation import filter_valid_urls, is_valid_url


def _require_image_url(value: str) -> str:
    if not is_valid_url(value):
        raise ValidationError({"image_url": "Must be an absolute URL with a scheme and host."})
    return value.strip()


def _empty_list() -> list[dict[str, Any]]:
    return []


class ContentService:
    def __init__(self, *, resolver: FallbackResolver) -> None:
        self.resolver = resolver

    # State landing pages

    def list_state_pages(self) -> Resolved[list[dict[str, Any]]]:
        def query(session: Session) -> list[dict[str, Any]]:
            statement = (
                select(StateLandingPage)
                .options(selectinload(StateLandingPage.images))
                .order_by(StateLandingPage.state)
            )
            return [page.to_record() for page in session.scalars(statement)]

        return self.resolver.read("state_pages", query, _empty_list)

    def get_state_page(self, page_id: int) -> Resolved[dict[str, Any]]:
        def query(session: Session) -> dict[str, Any] | None:
            page = session.get(
                StateLandingPage, page_id, options=[selectinload(StateLandingPage.images)]
            )
            return page.to_record() if page is not None else None

        resolved = self.resolver.read("state_page", query)
        if resolved.value is None:
            raise NotFoundError(f"State landing page not found: {page_id}")
        return resolved

    def create_state_page(self, payload: StatePageCreate) -> dict[str, Any]:
        values = payload.model_dump(exclude={"images"})
        images = filter_valid_urls(payload.images)

        def operation(session: Session) -> dict[str, Any]:
            existing = session.scalar(
                select(StateLandingPage).where(StateLandingPage.state == values["state"])
            )
            if existing is not None:
                raise ValidationError(
                    {"state": f"A landing page for {values['state']} already exists."}
                )
            page = StateLandingPage(**values)
            page.images = [StateLandingImage(image_url=url) for url in images]
            session.add(page)
            session.flush()
            return page.to_record()

        return self.resolver.write("state_page", operation)

    def update_state_page(self, page_id: int, payload: StatePageUpdate) -> dict[str, Any]:
        changes = payload.model_dump(exclude_unset=True, exclude={"images"})
        if "state" in changes and changes["state"] is None:
            raise ValidationError({"state": "This field may not be null."})
        replace_images = payload.images is not None
        images = filter_valid_urls(payload.images)

        def operation(session: Session) -> dict[str, Any]:
            page = session.get(
                StateLandingPage, page_id, options=[selectinload(StateLandingPage.images)]
            )
            if page is None:
                raise NotFoundError(f"State landing page not found: {page_id}")
            for field, value in changes.items():
                setattr(page, field, value)
            if replace_images:
                page.images = [StateLandingImage(image_url=url) for url in images]
            session.flush()
            return page.to_record()

        return self.resolver.write("state_page", operation)

    def delete_state_page(self, page_id: int) -> None:
        def operation(session: Session) -> None:
            page = session.get(StateLandingPage, page_id)
            if page is None:
                raise NotFoundError(f"State landing page not found: {page_id}")
            session.delete(page)

        self.resolver.write("state_page", operation)

    # Pricing tiers

    def list_pricing_tiers(self) -> Resolved[list[dict[str, Any]]]:
        def query(session: Session) -> list[dict[str, Any]]:
            statement = select(PricingTier).order_by(PricingTier.sort_order, PricingTier.id)
            return [tier.to_record() for tier in session.scalars(statement)]

        return self.resolver.read("pricing_tiers", query, seed_data.fallback_pricing_tiers)

    def get_pricing_tier(self, tier_id: int) -> Resolved[dict[str, Any]]:
        def query(session: Session) -> dict[str, Any] | None:
            tier = session.get(PricingTier, tier_id)
            return tier.to_record() if tier is not None else None

        def fallback() -> dict[str, Any] | None:
            return next(
                (tier for tier in seed_data.fallback_pricing_tiers() if tier["id"] == tier_id),
                None,
            )

        resolved = self.resolver.read("pricing_tier", query, fallback)
        if resolved.value is None:
            raise NotFoundError(f"Pricing tier not found: {tier_id}")
        return resolved

    def create_pricing_tier(self, payload: PricingTierCreate) -> dict[str, Any]:
        def operation(session: Session) -> dict[str, Any]:
            tier = PricingTier(**payload.model_dump())
            session.add(tier)
            session.flush()
            return tier.to_record()

        return self.resolver.write("pricing_tier", operation)

    def update_pricing_tier(self, tier_id: int, payload: PricingTierUpdate) -> dict[str, Any]:
        changes = payload.model_dump(exclude_unset=True)
        nulls = {
            field: "This field may not be null." for field, value in changes.items() if value is None
        }
        if nulls:
            raise ValidationError(nulls)

        def operation(session: Session) -> dict[str, Any]:
            tier = session.get(PricingTier, tier_id)
            if tier is None:
                raise NotFoundError(f"Pricing tier not found: {tier_id}")
            for field, value in changes.items():
                setattr(tier, field, value)
            session.flush()
            return tier.to_record()

        return self.resolver.write("pricing_tier", operation)

    def delete_pricing_tier(self, tier_id: int) -> None:
        def operation(session: Session) -> None:
            tier = session.get(PricingTier, tier_id)
            if tier is None:
                raise NotFoundError(f"Pricing tier not found: {tier_id}")
            session.delete(tier)

        self.resolver.write("pricing_tier", operation)

    # Homepage

    def get_homepage(self) -> Resolved[dict[str, Any]]:
        """Return the homepage record, creating the default one on first read."""

        def query(session: Session) -> dict[str, Any]:
            content = session.scalar(select(HomepageContent).order_by(HomepageContent.id).limit(1))
            if content is None:
                defaults = seed_data.fallback_homepage()
                defaults.pop("id")
                content = HomepageContent(**defaults)
                session.add(content)
                session.flush()
            return content.to_record()

        return self.resolver.read("homepage", query, seed_data.fallback_homepage)

    def update_homepage(self, payload: HomepageUpdate) -> dict[str, Any]:
        changes = payload.model_dump(exclude_unset=True)
        for field in ("hero_title", "hero_subtitle", "slideshow_enabled"):
            if field in changes and changes[field] is None:
                raise ValidationError({field: "This field may not be null."})

        def operation(session: Session) -> dict[str, Any]:
            content = session.scalar(select(HomepageContent).order_by(HomepageContent.id).limit(1))
            if content is None:
                values = seed_data.fallback_homepage()
                values.pop("id")
                values.update(changes)
                content = HomepageContent(**values)
                session.add(content)
            else:
                for field, value in changes.items():
                    setattr(content, field, value)
            session.flush()
            return content.to_record()

        return self.resolver.write("homepage", operation)

    # Slideshows

    def list_homepage_slides(self) -> Resolved[list[dict[str, Any]]]:
        def query(session: Session) -> list[dict[str, Any]]:
            statement = select(HomepageSlideshowImage).order_by(HomepageSlideshowImage.id)
            return [image.to_record() for image in session.scalars(statement)]

        return self.resolver.read("homepage_slideshow", query, _empty_list)

    def add_homepage_slide(self, payload: HomepageSlideCreate) -> dict[str, Any]:
        image_url = _require_image_url(payload.image_url)

        def operation(session: Session) -> dict[str, Any]:
            image = HomepageSlideshowImage(image_url=image_url, caption=payload.caption)
            session.add(image)
            session.flush()
            return image.to_record()

        return self.resolver.write("homepage_slideshow", operation)

    def delete_homepage_slide(self, image_id: int) -> None:
        def operation(session: Session) -> None:
            image = session.get(HomepageSlideshowImage, image_id)
            if image is None:
                raise NotFoundError(f"Slideshow image not found: {image_id}")
            session.delete(image)

        self.resolver.write("homepage_slideshow", operation)

    def list_disposal_slides(self, *, state: str | None = None) -> Resolved[list[dict[str, Any]]]:
        def query(session: Session) -> list[dict[str, Any]]:
            statement = select(DisposalSlideshowImage).order_by(DisposalSlideshowImage.id)
            if state:
                statement = statement.where(DisposalSlideshowImage.state == state)
            return [image.to_record() for image in session.scalars(statement)]

        return self.resolver.read("disposal_slideshow", query, _empty_list)

    def add_disposal_slide(self, payload: DisposalSlideCreate) -> dict[str, Any]:
        image_url = _require_image_url(payload.image_url)

        def operation(session: Session) -> dict[str, Any]:
            image = DisposalSlideshowImage(
                state=payload.state, image_url=image_url, title=payload.title
            )
            session.add(image)
            session.flush()
            return image.to_record()

        return self.resolver.write("disposal_slideshow", operation)
