# This file defines the search endpoint that feeds the map and list views.
# Radius must be one of the supported options; any other value is rejected rather than clamped.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.api.dependencies import get_search_service
from src.api.response_envelope import build_envelope
from src.api.schemas.search_schemas import ListingSearchResponse
from src.api.services.search_service import ListingType, SearchService

router = APIRouter(prefix="/listings", tags=["listings"])
SearchServiceDep = Annotated[SearchService, Depends(get_search_service)]


@router.get("", response_model=ListingSearchResponse)
def search_listings(
    request: Request,
    service: SearchServiceDep,
    q: str | None = Query(default=None, max_length=200),
    latitude: float | None = Query(default=None, ge=-90, le=90),
    longitude: float | None = Query(default=None, ge=-180, le=180),
    radius: int | None = Query(default=None),
    listing_type: ListingType = Query(default="all"),
) -> dict[str, object]:
    result = service.search(
        query=q,
        latitude=latitude,
        longitude=longitude,
        radius=radius,
        listing_type=listing_type,
    )
    return build_envelope(
        request_id=request.state.request_id,
        data=result["data"],
        source=result["source"],
        warnings=result["warnings"],
    )
