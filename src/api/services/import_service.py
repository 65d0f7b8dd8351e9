# This file implements the one-shot seed import from the bundled directory dataset.
# Re-running it is safe: companies already present (same name and state, case-insensitive)
# and facilities already present (same name) are skipped.

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.api.fallback import FallbackResolver
from src.directory import seed_data
from src.directory.models import Company, DisposalFacility

logger = logging.getLogger(__name__)

_COMPANY_COLUMNS = (
    "name",
    "city",
    "state",
    "phone",
    "website",
    "email",
    "address",
    "tier",
    "coverage_radius",
    "latitude",
    "longitude",
    "union_affiliated",
    "specialties",
)
_FACILITY_COLUMNS = (
    "name",
    "address",
    "city",
    "state",
    "phone",
    "hours",
    "latitude",
    "longitude",
    "materials_accepted",
)


class ImportService:
    def __init__(self, *, resolver: FallbackResolver) -> None:
        self.resolver = resolver

    def import_seed_data(self) -> dict[str, int]:
        companies = seed_data.importable_companies()
        facilities = seed_data.fallback_facilities()

        def operation(session: Session) -> dict[str, int]:
            existing_companies = {
                (name.lower(), state.lower())
                for name, state in session.execute(select(Company.name, Company.state))
            }
            existing_facilities = {
                name.lower() for name in session.scalars(select(DisposalFacility.name))
            }

            companies_imported = 0
            for record in companies:
                key = (record["name"].lower(), record["state"].lower())
                if key in existing_companies:
                    continue
                session.add(Company(**_columns(record, _COMPANY_COLUMNS)))
                existing_companies.add(key)
                companies_imported += 1

            facilities_imported = 0
            for record in facilities:
                if record["name"].lower() in existing_facilities:
                    continue
                session.add(DisposalFacility(**_columns(record, _FACILITY_COLUMNS)))
                existing_facilities.add(record["name"].lower())
                facilities_imported += 1

            session.flush()
            return {
                "companies_imported": companies_imported,
                "companies_skipped": len(companies) - companies_imported,
                "facilities_imported": facilities_imported,
                "facilities_skipped": len(facilities) - facilities_imported,
            }

        summary = self.resolver.write("seed_import", operation)
        logger.info(
            "Seed import finished: %d companies, %d facilities imported",
            summary["companies_imported"],
            summary["facilities_imported"],
        )
        return summary


def _columns(record: dict[str, Any], columns: tuple[str, ...]) -> dict[str, Any]:
    return {column: record.get(column) for column in columns}
