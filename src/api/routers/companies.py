# This file defines the admin CRUD endpoints for hydro-excavation companies.
# The list here is the raw record list (ordered by name, coordinates possibly null);
# the map and search views read the transformed listings from /listings instead.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request

from src.api.dependencies import get_listing_service
from src.api.response_envelope import build_envelope, build_resolved_envelope
from src.api.schemas.common import DeleteResponse
from src.api.schemas.listing_schemas import (
    CompanyCreate,
    CompanyListResponse,
    CompanyResponse,
    CompanyUpdate,
)
from src.api.services.listing_service import ListingService

router = APIRouter(prefix="/companies", tags=["companies"])
ListingServiceDep = Annotated[ListingService, Depends(get_listing_service)]
CompanyId = Annotated[int, Path(ge=1)]


@router.get("", response_model=CompanyListResponse)
def list_companies(request: Request, service: ListingServiceDep) -> dict[str, object]:
    return build_resolved_envelope(
        request_id=request.state.request_id, resolved=service.list_companies()
    )


@router.post("", response_model=CompanyResponse, status_code=201)
def create_company(
    payload: CompanyCreate,
    request: Request,
    service: ListingServiceDep,
) -> dict[str, object]:
    return build_envelope(
        request_id=request.state.request_id, data=service.create_company(payload)
    )


@router.get("/{company_id}", response_model=CompanyResponse)
def get_company(
    company_id: CompanyId,
    request: Request,
    service: ListingServiceDep,
) -> dict[str, object]:
    return build_resolved_envelope(
        request_id=request.state.request_id, resolved=service.get_company(company_id)
    )


@router.put("/{company_id}", response_model=CompanyResponse)
def update_company(
    company_id: CompanyId,
    payload: CompanyUpdate,
    request: Request,
    service: ListingServiceDep,
) -> dict[str, object]:
    return build_envelope(
        request_id=request.state.request_id,
        data=service.update_company(company_id, payload),
    )


@router.delete("/{company_id}", response_model=DeleteResponse)
def delete_company(
    company_id: CompanyId,
    request: Request,
    service: ListingServiceDep,
) -> dict[str, object]:
    service.delete_company(company_id)
    return build_envelope(
        request_id=request.state.request_id, data={"success": True, "id": company_id}
    )
