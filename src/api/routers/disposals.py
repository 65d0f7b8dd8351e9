# This file defines disposal facility CRUD and the disposal page slideshow endpoints.
# Slideshow routes are registered before `/{facility_id}` so the literal segment wins.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request

from src.api.dependencies import get_content_service, get_listing_service
from src.api.response_envelope import build_envelope, build_resolved_envelope
from src.api.schemas.common import DeleteResponse
from src.api.schemas.content_schemas import (
    DisposalSlideCreate,
    DisposalSlideListResponse,
    DisposalSlideResponse,
)
from src.api.schemas.listing_schemas import (
    FacilityCreate,
    FacilityListResponse,
    FacilityResponse,
    FacilityUpdate,
)
from src.api.services.content_service import ContentService
from src.api.services.listing_service import ListingService

router = APIRouter(prefix="/disposals", tags=["disposals"])
ListingServiceDep = Annotated[ListingService, Depends(get_listing_service)]
ContentServiceDep = Annotated[ContentService, Depends(get_content_service)]
FacilityId = Annotated[int, Path(ge=1)]


@router.get("/slideshow", response_model=DisposalSlideListResponse)
def list_disposal_slides(
    request: Request,
    service: ContentServiceDep,
    state: str | None = Query(default=None),
) -> dict[str, object]:
    return build_resolved_envelope(
        request_id=request.state.request_id,
        resolved=service.list_disposal_slides(state=state),
    )


@router.post("/slideshow", response_model=DisposalSlideResponse, status_code=201)
def add_disposal_slide(
    payload: DisposalSlideCreate,
    request: Request,
    service: ContentServiceDep,
) -> dict[str, object]:
    return build_envelope(
        request_id=request.state.request_id, data=service.add_disposal_slide(payload)
    )


@router.get("", response_model=FacilityListResponse)
def list_facilities(request: Request, service: ListingServiceDep) -> dict[str, object]:
    return build_resolved_envelope(
        request_id=request.state.request_id, resolved=service.list_facilities()
    )


@router.post("", response_model=FacilityResponse, status_code=201)
def create_facility(
    payload: FacilityCreate,
    request: Request,
    service: ListingServiceDep,
) -> dict[str, object]:
    return build_envelope(
        request_id=request.state.request_id, data=service.create_facility(payload)
    )


@router.get("/{facility_id}", response_model=FacilityResponse)
def get_facility(
    facility_id: FacilityId,
    request: Request,
    service: ListingServiceDep,
) -> dict[str, object]:
    return build_resolved_envelope(
        request_id=request.state.request_id, resolved=service.get_facility(facility_id)
    )


@router.put("/{facility_id}", response_model=FacilityResponse)
def update_facility(
    facility_id: FacilityId,
    payload: FacilityUpdate,
    request: Request,
    service: ListingServiceDep,
) -> dict[str, object]:
    return build_envelope(
        request_id=request.state.request_id,
        data=service.update_facility(facility_id, payload),
    )


@router.delete("/{facility_id}", response_model=DeleteResponse)
def delete_facility(
    facility_id: FacilityId,
    request: Request,
    service: ListingServiceDep,
) -> dict[str, object]:
    service.delete_facility(facility_id)
    return build_envelope(
        request_id=request.state.request_id, data={"success": True, "id": facility_id}
    )
