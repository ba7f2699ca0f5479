import logging
from typing import Optional
from uuid import uuid4
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError

from sales_dashboard.schemas.product import ProductCreate, ProductEdit, ProductList, ProductRead
from sales_dashboard.repositories.product_repo import ProductRepository
from sales_dashboard.repositories.activity_repo import ActivityRepository
from sales_dashboard.models.enums import ActivityAction
from sales_dashboard.models.product import Product
from sales_dashboard.service.errors import integrity_to_http, value_error_to_http

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, repo: ProductRepository, activity_repo: ActivityRepository):
        self.repo = repo
        self.activity_repo = activity_repo

    async def create_product(self, owner_id: str, data: ProductCreate) -> Product:
        if await self.repo.get_by_name(owner_id, data.name):
            raise HTTPException(status_code=409, detail=f"Product named '{data.name}' already exists")

        try:
            product = await self.repo.create(
                id=str(uuid4()),
                owner_id=owner_id,
                name=data.name,
                category=data.category,
                price=data.price,
                cost_price=data.cost_price,
                stock=data.stock,
                min_stock=data.min_stock,
                unit=data.unit,
            )
        except IntegrityError as e:
            raise integrity_to_http(e, f"Product named '{data.name}' already exists")

        await self.activity_repo.add(owner_id, ActivityAction.add_product.value, f"Added product {product.name}")
        logger.info("product %s created for owner %s", product.id, owner_id)
        return product

    async def list_products(
        self,
        owner_id: str,
        *,
        limit: Optional[int] = None,
        offset: int = 0,
        name_query: Optional[str] = None,
        category: Optional[str] = None,
    ) -> ProductList:
        products = await self.repo.get_all(
            owner_id, limit=limit, offset=offset, name_query=name_query, category=category
        )
        total = await self.repo.count(owner_id)
        return ProductList(products=[ProductRead.model_validate(p) for p in products], total=total)

    async def get_product(self, owner_id: str, product_id: str) -> Product:
        product = await self.repo.get(owner_id, product_id)
        if not product:
            raise HTTPException(status_code=404, detail=f"Product '{product_id}' not found")
        return product

    async def edit_product(self, owner_id: str, product_id: str, data: ProductEdit) -> Product:
        try:
            product = await self.repo.update_partial(owner_id, product_id, **data.model_dump(exclude_unset=True))
        except ValueError as e:
            raise value_error_to_http(e)
        except IntegrityError as e:
            raise integrity_to_http(e, "Product with this name already exists")

        await self.activity_repo.add(owner_id, ActivityAction.update_product.value, f"Updated product {product.name}")
        return product

    async def delete_product(self, owner_id: str, product_id: str) -> dict:
        try:
            product = await self.repo.delete(owner_id, product_id)
        except ValueError as e:
            raise HTTPException(status_code=404, detail=str(e))

        await self.activity_repo.add(owner_id, ActivityAction.delete_product.value, f"Deleted product {product.name}")
        return {"detail": f"Product '{product_id}' deleted."}
