import logging
from datetime import date
from typing import Optional
from uuid import uuid4
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError

from sales_dashboard.analytics import daily_aggregates, date_window
from sales_dashboard.schemas.analytics import DailyAggregateRead
from sales_dashboard.schemas.sale import SaleBulkCreate, SaleCreate, SaleEdit, SaleListResponse, SaleRead
from sales_dashboard.repositories.sale_repo import SaleRepository
from sales_dashboard.repositories.product_repo import ProductRepository
from sales_dashboard.repositories.activity_repo import ActivityRepository
from sales_dashboard.models.enums import ActivityAction
from sales_dashboard.models.sale import Sale
from sales_dashboard.service.errors import integrity_to_http

logger = logging.getLogger(__name__)


class SaleService:
    def __init__(
        self,
        repo: SaleRepository,
        product_repo: ProductRepository,
        activity_repo: ActivityRepository,
    ):
        self.repo = repo
        self.product_repo = product_repo
        self.activity_repo = activity_repo

    async def list_sales(
        self,
        owner_id: str,
        days: int = 30,
        product_id: Optional[str] = None,
        today: Optional[date] = None,
    ) -> SaleListResponse:
        start, end = date_window(days, today)
        sales = await self.repo.get_all(owner_id, start=start, end=end, product_id=product_id)
        return SaleListResponse(
            sales=[SaleRead.model_validate(s) for s in sales],
            daily_sales=[DailyAggregateRead.model_validate(d) for d in daily_aggregates(sales)],
            total=len(sales),
        )

    async def get_sale(self, owner_id: str, sale_id: str) -> Sale:
        sale = await self.repo.get(owner_id, sale_id)
        if not sale:
            raise HTTPException(status_code=404, detail=f"Sale '{sale_id}' not found")
        return sale

    async def _build_row(self, owner_id: str, data: SaleCreate) -> dict:
        product = await self.product_repo.get(owner_id, data.product_id)
        if not product:
            raise HTTPException(status_code=404, detail=f"Product '{data.product_id}' not found")

        unit_price = data.unit_price if data.unit_price is not None else product.price
        return {
            "id": str(uuid4()),
            "owner_id": owner_id,
            "date": data.date,
            "product_id": product.id,
            "product_name": product.name,
            "quantity": data.quantity,
            "unit_price": unit_price,
            "total": data.quantity * unit_price,
        }

    async def _save(self, rows: list[dict], *, take_from_stock: bool) -> list[Sale]:
        try:
            return await self.repo.create_many(rows, take_from_stock=take_from_stock)
        except IntegrityError as e:
            raise integrity_to_http(e, "Sale with this id already exists")

    async def record_sale(self, owner_id: str, data: SaleCreate) -> Sale:
        row = await self._build_row(owner_id, data)
        # a sale made now takes the units out of stock
        sales = await self._save([row], take_from_stock=True)
        logger.info("sale %s recorded for product %s", row["id"], row["product_id"])
        return sales[0]

    async def record_bulk(self, owner_id: str, data: SaleBulkCreate) -> list[Sale]:
        rows = [await self._build_row(owner_id, item) for item in data.sales]
        # imported rows are history: current stock already reflects them
        sales = await self._save(rows, take_from_stock=False)
        await self.activity_repo.add(owner_id, ActivityAction.import_sales.value, f"Imported {len(sales)} sales")
        return sales

    async def edit_sale(self, owner_id: str, sale_id: str, data: SaleEdit) -> Sale:
        fields = data.model_dump(exclude_unset=True)

        # switching product also renames the line unless a name was given
        if fields.get("product_id") and not fields.get("product_name"):
            product = await self.product_repo.get(owner_id, fields["product_id"])
            if not product:
                raise HTTPException(status_code=404, detail=f"Product '{fields['product_id']}' not found")
            fields["product_name"] = product.name

        try:
            return await self.repo.update(owner_id, sale_id, **fields)
        except ValueError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except IntegrityError as e:
            raise integrity_to_http(e, "Sale with this id already exists")

    async def delete_sale(self, owner_id: str, sale_id: str) -> dict:
        try:
            await self.repo.delete(owner_id, sale_id)
        except ValueError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return {"detail": f"Sale '{sale_id}' deleted."}
