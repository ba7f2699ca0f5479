from fastapi import APIRouter, Depends
from sales_dashboard.schemas.data import DataLoadResponse
from sales_dashboard.service.analytics_service import AnalyticsService
from sales_dashboard.api.deps import get_owner_id, get_analytics_service

router = APIRouter(prefix="/data", tags=["data"])


@router.get(
    "/load",
    response_model=DataLoadResponse,
    summary="Products, sales and settings in one call (empty when the store is unavailable)",
)
async def load_data(
    owner_id: str = Depends(get_owner_id),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return await service.load_data(owner_id)
