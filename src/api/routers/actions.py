# This file defines one-off action endpoints: company referrals, admin login and the seed import.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_admin_service, get_import_service, get_referral_service
from src.api.schemas.action_schemas import (
    AdminLoginRequest,
    AdminLoginResponse,
    ImportSummary,
    ReferralRequest,
    ReferralResponse,
)
from src.api.services.admin_service import AdminService
from src.api.services.import_service import ImportService
from src.api.services.referral_service import ReferralService

router = APIRouter(tags=["actions"])
ReferralServiceDep = Annotated[ReferralService, Depends(get_referral_service)]
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]
ImportServiceDep = Annotated[ImportService, Depends(get_import_service)]


@router.post("/referral", response_model=ReferralResponse)
def submit_referral(payload: ReferralRequest, service: ReferralServiceDep) -> dict[str, object]:
    return service.submit(payload)


@router.post("/admin/login", response_model=AdminLoginResponse)
def admin_login(payload: AdminLoginRequest, service: AdminServiceDep) -> dict[str, object]:
    return service.login(payload.password)


@router.post("/import", response_model=ImportSummary)
def import_seed_data(service: ImportServiceDep) -> dict[str, int]:
    return service.import_seed_data()
