from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sales_dashboard.schemas.product import ProductCreate, ProductEdit, ProductList, ProductRead
from sales_dashboard.service.product_service import ProductService
from sales_dashboard.api.deps import get_owner_id, get_product_service

router = APIRouter(prefix="/products", tags=["products"])


@router.get(
    "",
    response_model=ProductList,
    summary="List products",
)
async def list_products(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    q: Optional[str] = Query(None, description="Case-insensitive name filter"),
    category: Optional[str] = None,
    owner_id: str = Depends(get_owner_id),
    service: ProductService = Depends(get_product_service),
):
    return await service.list_products(owner_id, limit=limit, offset=offset, name_query=q, category=category)


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
)
async def create_product(
    payload: ProductCreate,
    owner_id: str = Depends(get_owner_id),
    service: ProductService = Depends(get_product_service),
):
    return await service.create_product(owner_id, payload)


@router.get(
    "/{product_id}",
    response_model=ProductRead,
    summary="Get product",
)
async def get_product(
    product_id: str,
    owner_id: str = Depends(get_owner_id),
    service: ProductService = Depends(get_product_service),
):
    return await service.get_product(owner_id, product_id)


@router.patch(
    "/{product_id}",
    response_model=ProductRead,
    summary="Edit product",
)
async def patch_product(
    product_id: str,
    payload: ProductEdit,
    owner_id: str = Depends(get_owner_id),
    service: ProductService = Depends(get_product_service),
):
    return await service.edit_product(owner_id, product_id, payload)


@router.delete(
    "/{product_id}",
    summary="Delete product",
)
async def delete_product(
    product_id: str,
    owner_id: str = Depends(get_owner_id),
    service: ProductService = Depends(get_product_service),
):
    return await service.delete_product(owner_id, product_id)
