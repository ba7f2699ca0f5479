from datetime import date
from typing import Optional, Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from sales_dashboard.models.product import Product
from sales_dashboard.models.sale import Sale


class SaleRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_many(self, sales: Sequence[dict], *, take_from_stock: bool = False) -> list[Sale]:
        """Inserts the sales in one transaction.

        With `take_from_stock` the sold quantities are subtracted from product stock
        in the same transaction, so either everything is written or nothing is.
        """
        rows = [Sale(**data) for data in sales]
        self.session.add_all(rows)
        try:
            await self.session.flush()
            if take_from_stock:
                for row in rows:
                    await self._take_from_stock(row.owner_id, row.product_id, row.quantity)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise e
        for row in rows:
            await self.session.refresh(row)
        return rows

    async def _take_from_stock(self, owner_id: str, product_id: str, quantity: int) -> None:
        # no clamping: stock may go negative when oversold
        await self.session.execute(
            update(Product)
            .where(Product.id == product_id, Product.owner_id == owner_id)
            .values(stock=Product.stock - quantity, updated_at=func.now())
        )

    async def create(self, **data) -> Sale:
        rows = await self.create_many([data])
        return rows[0]

    async def get(self, owner_id: str, id: str) -> Optional[Sale]:
        return await self.session.scalar(
            select(Sale).where(Sale.id == id, Sale.owner_id == owner_id)
        )

    async def get_all(
        self,
        owner_id: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        product_id: Optional[str] = None,
        newest_first: bool = False,
    ) -> list[Sale]:
        stmt = select(Sale).where(Sale.owner_id == owner_id)
        if start:
            stmt = stmt.where(Sale.date >= start)
        if end:
            stmt = stmt.where(Sale.date <= end)
        if product_id:
            stmt = stmt.where(Sale.product_id == product_id)

        if newest_first:
            stmt = stmt.order_by(Sale.date.desc(), Sale.created_at.desc())
        else:
            stmt = stmt.order_by(Sale.date, Sale.created_at)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, owner_id: str, id: str, **fields) -> Sale:
        sale = await self.get(owner_id, id)
        if not sale:
            raise ValueError(f"Sale '{id}' not found")

        for key, value in fields.items():
            if value is not None:
                setattr(sale, key, value)
        # invariant
        sale.total = sale.quantity * sale.unit_price

        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise e
        await self.session.refresh(sale)
        return sale

    async def delete(self, owner_id: str, id: str) -> None:
        sale = await self.get(owner_id, id)
        if not sale:
            raise ValueError(f"Sale '{id}' not found")
        await self.session.delete(sale)
        await self.session.commit()
