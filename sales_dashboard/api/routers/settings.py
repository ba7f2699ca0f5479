from fastapi import APIRouter, Depends
from sales_dashboard.schemas.settings import BusinessSettingsRead, BusinessSettingsUpdate
from sales_dashboard.service.settings_service import SettingsService
from sales_dashboard.api.deps import get_owner_id, get_settings_service

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=BusinessSettingsRead, summary="Business settings")
async def get_settings(
    owner_id: str = Depends(get_owner_id),
    service: SettingsService = Depends(get_settings_service),
):
    return await service.get_settings(owner_id)


@router.put("", response_model=BusinessSettingsRead, summary="Update business settings")
async def put_settings(
    payload: BusinessSettingsUpdate,
    owner_id: str = Depends(get_owner_id),
    service: SettingsService = Depends(get_settings_service),
):
    return await service.update_settings(owner_id, payload)
