from fastapi import APIRouter, Depends, Query
from sales_dashboard.schemas.activity import ActivityLogRead
from sales_dashboard.service.activity_service import ActivityService
from sales_dashboard.api.deps import get_owner_id, get_activity_service

router = APIRouter(prefix="/activity", tags=["activity"])


@router.get("", response_model=list[ActivityLogRead], summary="Latest activity, newest first")
async def list_activity(
    limit: int = Query(100, ge=1, le=500),
    owner_id: str = Depends(get_owner_id),
    service: ActivityService = Depends(get_activity_service),
):
    return await service.latest(owner_id, limit=limit)
