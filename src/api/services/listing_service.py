# This file implements read and write services for company and disposal facility listings.
# Reads go through the fallback resolver so the directory still renders from bundled data
# when no datastore is configured; writes require the datastore and report 503 otherwise.
# Rows leave this layer as plain record dictionaries with identical keys for both sources.

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from src.api.error_handlers import NotFoundError, ValidationError
from src.api.fallback import FallbackResolver, Resolved
from src.api.schemas.listing_schemas import (
    CompanyCreate,
    CompanyUpdate,
    FacilityCreate,
    FacilityUpdate,
)
from src.directory import seed_data
from src.directory.models import Company, CompanyImage, DisposalFacility
from src.directory.transforms import join_delimited
from src.directory.validation import filter_valid_urls

_REQUIRED_COMPANY_FIELDS = {"name", "city", "state", "tier", "union_affiliated"}


def _find_by_id(records: list[dict[str, Any]], record_id: int) -> dict[str, Any] | None:
    return next((record for record in records if record["id"] == record_id), None)


def _reject_nulls(changes: dict[str, Any], required: set[str]) -> None:
    errors = {
        field: "This field may not be null."
        for field in sorted(required)
        if field in changes and changes[field] is None
    }
    if errors:
        raise ValidationError(errors)


class ListingService:
    """CRUD for the two listing types shown on the map."""

    def __init__(self, *, resolver: FallbackResolver) -> None:
        self.resolver = resolver

    # Companies

    def list_companies(self) -> Resolved[list[dict[str, Any]]]:
        def query(session: Session) -> list[dict[str, Any]]:
            statement = (
                select(Company)
                .options(selectinload(Company.images))
                .order_by(Company.name, Company.id)
            )
            return [company.to_record() for company in session.scalars(statement)]

        return self.resolver.read("companies", query, seed_data.fallback_companies)

    def list_companies_for_map(self) -> Resolved[list[dict[str, Any]]]:
        """Companies in insertion order, which browse mode relies on to break tier ties."""

        def query(session: Session) -> list[dict[str, Any]]:
            statement = (
                select(Company)
                .options(selectinload(Company.images))
                .order_by(Company.created_at, Company.id)
            )
            return [company.to_record() for company in session.scalars(statement)]

        return self.resolver.read("companies", query, seed_data.importable_companies)

    def get_company(self, company_id: int) -> Resolved[dict[str, Any]]:
        def query(session: Session) -> dict[str, Any] | None:
            company = session.get(Company, company_id, options=[selectinload(Company.images)])
            return company.to_record() if company is not None else None

        resolved = self.resolver.read(
            "company",
            query,
            lambda: _find_by_id(seed_data.fallback_companies(), company_id),
        )
        if resolved.value is None:
            raise NotFoundError(f"Company not found: {company_id}")
        return resolved

    def create_company(self, payload: CompanyCreate) -> dict[str, Any]:
        values = payload.model_dump(exclude={"images", "specialties"})
        values["specialties"] = join_delimited(payload.specialties)
        images = filter_valid_urls(payload.images)

        def operation(session: Session) -> dict[str, Any]:
            company = Company(**values)
            company.images = [CompanyImage(image_url=url) for url in images]
            session.add(company)
            session.flush()
            return company.to_record()

        return self.resolver.write("company", operation)

    def update_company(self, company_id: int, payload: CompanyUpdate) -> dict[str, Any]:
        changes = payload.model_dump(exclude_unset=True, exclude={"images", "specialties"})
        _reject_nulls(changes, _REQUIRED_COMPANY_FIELDS)
        if "specialties" in payload.model_fields_set:
            changes["specialties"] = join_delimited(payload.specialties)
        replace_images = payload.images is not None
        images = filter_valid_urls(payload.images)

        def operation(session: Session) -> dict[str, Any]:
            company = session.get(Company, company_id, options=[selectinload(Company.images)])
            if company is None:
                raise NotFoundError(f"Company not found: {company_id}")
            for field, value in changes.items():
                setattr(company, field, value)
            if replace_images:
                company.images = [CompanyImage(image_url=url) for url in images]
            session.flush()
            return company.to_record()

        return self.resolver.write("company", operation)

    def delete_company(self, company_id: int) -> None:
        def operation(session: Session) -> None:
            company = session.get(Company, company_id)
            if company is None:
                raise NotFoundError(f"Company not found: {company_id}")
            session.delete(company)

        self.resolver.write("company", operation)

    # Disposal facilities

    def list_facilities(self) -> Resolved[list[dict[str, Any]]]:
        def query(session: Session) -> list[dict[str, Any]]:
            statement = select(DisposalFacility).order_by(
                DisposalFacility.created_at.desc(), DisposalFacility.id.desc()
            )
            return [facility.to_record() for facility in session.scalars(statement)]

        return self.resolver.read("disposal_facilities", query, seed_data.fallback_facilities)

    def get_facility(self, facility_id: int) -> Resolved[dict[str, Any]]:
        def query(session: Session) -> dict[str, Any] | None:
            facility = session.get(DisposalFacility, facility_id)
            return facility.to_record() if facility is not None else None

        resolved = self.resolver.read(
            "disposal_facility",
            query,
            lambda: _find_by_id(seed_data.fallback_facilities(), facility_id),
        )
        if resolved.value is None:
            raise NotFoundError(f"Disposal facility not found: {facility_id}")
        return resolved

    def create_facility(self, payload: FacilityCreate) -> dict[str, Any]:
        values = payload.model_dump(exclude={"materials_accepted"})
        values["materials_accepted"] = join_delimited(payload.materials_accepted)

        def operation(session: Session) -> dict[str, Any]:
            facility = DisposalFacility(**values)
            session.add(facility)
            session.flush()
            return facility.to_record()

        return self.resolver.write("disposal_facility", operation)

    def update_facility(self, facility_id: int, payload: FacilityUpdate) -> dict[str, Any]:
        changes = payload.model_dump(exclude_unset=True, exclude={"materials_accepted"})
        _reject_nulls(changes, {"name"})
        if "materials_accepted" in payload.model_fields_set:
            changes["materials_accepted"] = join_delimited(payload.materials_accepted)

        def operation(session: Session) -> dict[str, Any]:
            facility = session.get(DisposalFacility, facility_id)
            if facility is None:
                raise NotFoundError(f"Disposal facility not found: {facility_id}")
            for field, value in changes.items():
                setattr(facility, field, value)
            session.flush()
            return facility.to_record()

        return self.resolver.write("disposal_facility", operation)

    def delete_facility(self, facility_id: int) -> None:
        def operation(session: Session) -> None:
            facility = session.get(DisposalFacility, facility_id)
            if facility is None:
                raise NotFoundError(f"Disposal facility not found: {facility_id}")
            session.delete(facility)

        self.resolver.write("disposal_facility", operation)
