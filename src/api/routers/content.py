# This file defines endpoints for editable site content: state landing pages, pricing tiers,
# homepage hero content and the homepage slideshow.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request

from src.api.dependencies import get_content_service
from src.api.response_envelope import build_envelope, build_resolved_envelope
from src.api.schemas.common import DeleteResponse
from src.api.schemas.content_schemas import (
    HomepageResponse,
    HomepageSlideCreate,
    HomepageSlideListResponse,
    HomepageSlideResponse,
    HomepageUpdate,
    PricingTierCreate,
    PricingTierListResponse,
    PricingTierResponse,
    PricingTierUpdate,
    StatePageCreate,
    StatePageListResponse,
    StatePageResponse,
    StatePageUpdate,
)
from src.api.services.content_service import ContentService

router = APIRouter(tags=["content"])
ContentServiceDep = Annotated[ContentService, Depends(get_content_service)]
RecordId = Annotated[int, Path(ge=1)]


def _deleted(request: Request, record_id: int) -> dict[str, object]:
    return build_envelope(
        request_id=request.state.request_id, data={"success": True, "id": record_id}
    )


@router.get("/state", response_model=StatePageListResponse)
def list_state_pages(request: Request, service: ContentServiceDep) -> dict[str, object]:
    return build_resolved_envelope(
        request_id=request.state.request_id, resolved=service.list_state_pages()
    )


@router.post("/state", response_model=StatePageResponse, status_code=201)
def create_state_page(
    payload: StatePageCreate, request: Request, service: ContentServiceDep
) -> dict[str, object]:
    return build_envelope(
        request_id=request.state.request_id, data=service.create_state_page(payload)
    )


@router.get("/state/{page_id}", response_model=StatePageResponse)
def get_state_page(
    page_id: RecordId, request: Request, service: ContentServiceDep
) -> dict[str, object]:
    return build_resolved_envelope(
        request_id=request.state.request_id, resolved=service.get_state_page(page_id)
    )


@router.put("/state/{page_id}", response_model=StatePageResponse)
def update_state_page(
    page_id: RecordId,
    payload: StatePageUpdate,
    request: Request,
    service: ContentServiceDep,
) -> dict[str, object]:
    return build_envelope(
        request_id=request.state.request_id, data=service.update_state_page(page_id, payload)
    )


@router.delete("/state/{page_id}", response_model=DeleteResponse)
def delete_state_page(
    page_id: RecordId, request: Request, service: ContentServiceDep
) -> dict[str, object]:
    service.delete_state_page(page_id)
    return _deleted(request, page_id)


@router.get("/pricing", response_model=PricingTierListResponse)
def list_pricing_tiers(request: Request, service: ContentServiceDep) -> dict[str, object]:
    return build_resolved_envelope(
        request_id=request.state.request_id, resolved=service.list_pricing_tiers()
    )


@router.post("/pricing", response_model=PricingTierResponse, status_code=201)
def create_pricing_tier(
    payload: PricingTierCreate, request: Request, service: ContentServiceDep
) -> dict[str, object]:
    return build_envelope(
        request_id=request.state.request_id, data=service.create_pricing_tier(payload)
    )


@router.get("/pricing/{tier_id}", response_model=PricingTierResponse)
def get_pricing_tier(
    tier_id: RecordId, request: Request, service: ContentServiceDep
) -> dict[str, object]:
    return build_resolved_envelope(
        request_id=request.state.request_id, resolved=service.get_pricing_tier(tier_id)
    )


@router.put("/pricing/{tier_id}", response_model=PricingTierResponse)
def update_pricing_tier(
    tier_id: RecordId,
    payload: PricingTierUpdate,
    request: Request,
    service: ContentServiceDep,
) -> dict[str, object]:
    return build_envelope(
        request_id=request.state.request_id, data=service.update_pricing_tier(tier_id, payload)
    )


@router.delete("/pricing/{tier_id}", response_model=DeleteResponse)
def delete_pricing_tier(
    tier_id: RecordId, request: Request, service: ContentServiceDep
) -> dict[str, object]:
    service.delete_pricing_tier(tier_id)
    return _deleted(request, tier_id)


@router.get("/homepage", response_model=HomepageResponse)
def get_homepage(request: Request, service: ContentServiceDep) -> dict[str, object]:
    return build_resolved_envelope(
        request_id=request.state.request_id, resolved=service.get_homepage()
    )


@router.put("/homepage", response_model=HomepageResponse)
def update_homepage(
    payload: HomepageUpdate, request: Request, service: ContentServiceDep
) -> dict[str, object]:
    return build_envelope(
        request_id=request.state.request_id, data=service.update_homepage(payload)
    )


@router.get("/homepage/slideshow", response_model=HomepageSlideListResponse)
def list_homepage_slides(request: Request, service: ContentServiceDep) -> dict[str, object]:
    return build_resolved_envelope(
        request_id=request.state.request_id, resolved=service.list_homepage_slides()
    )


@router.post("/homepage/slideshow", response_model=HomepageSlideResponse, status_code=201)
def add_homepage_slide(
    payload: HomepageSlideCreate, request: Request, service: ContentServiceDep
) -> dict[str, object]:
    return build_envelope(
        request_id=request.state.request_id, data=service.add_homepage_slide(payload)
    )


@router.delete("/homepage/slideshow/{image_id}", response_model=DeleteResponse)
def delete_homepage_slide(
    image_id: RecordId, request: Request, service: ContentServiceDep
) -> dict[str, object]:
    service.delete_homepage_slide(image_id)
    return _deleted(request, image_id)
