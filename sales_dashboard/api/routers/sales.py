from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sales_dashboard.schemas.sale import SaleBulkCreate, SaleCreate, SaleEdit, SaleListResponse, SaleRead
from sales_dashboard.service.sale_service import SaleService
from sales_dashboard.api.deps import get_owner_id, get_sale_service

router = APIRouter(prefix="/sales", tags=["sales"])


@router.get(
    "",
    response_model=SaleListResponse,
    summary="Sales of the last N days with a daily rollup",
)
async def list_sales(
    days: int = Query(30, ge=1, le=3650),
    product_id: Optional[str] = None,
    owner_id: str = Depends(get_owner_id),
    service: SaleService = Depends(get_sale_service),
):
    return await service.list_sales(owner_id, days=days, product_id=product_id)


@router.post(
    "",
    response_model=SaleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record a sale (takes the units out of stock)",
)
async def create_sale(
    payload: SaleCreate,
    owner_id: str = Depends(get_owner_id),
    service: SaleService = Depends(get_sale_service),
):
    return await service.record_sale(owner_id, payload)


@router.post(
    "/bulk",
    response_model=list[SaleRead],
    status_code=status.HTTP_201_CREATED,
    summary="Import several sales at once",
)
async def create_sales_bulk(
    payload: SaleBulkCreate,
    owner_id: str = Depends(get_owner_id),
    service: SaleService = Depends(get_sale_service),
):
    return await service.record_bulk(owner_id, payload)


@router.get(
    "/{sale_id}",
    response_model=SaleRead,
    summary="Get sale",
)
async def get_sale(
    sale_id: str,
    owner_id: str = Depends(get_owner_id),
    service: SaleService = Depends(get_sale_service),
):
    return await service.get_sale(owner_id, sale_id)


@router.patch(
    "/{sale_id}",
    response_model=SaleRead,
    summary="Edit sale (total is recomputed)",
)
async def patch_sale(
    sale_id: str,
    payload: SaleEdit,
    owner_id: str = Depends(get_owner_id),
    service: SaleService = Depends(get_sale_service),
):
    return await service.edit_sale(owner_id, sale_id, payload)


@router.delete(
    "/{sale_id}",
    summary="Delete sale",
)
async def delete_sale(
    sale_id: str,
    owner_id: str = Depends(get_owner_id),
    service: SaleService = Depends(get_sale_service),
):
    return await service.delete_sale(owner_id, sale_id)
