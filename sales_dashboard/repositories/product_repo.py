from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from sales_dashboard.models.product import Product


class ProductRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        *,
        id: str,
        owner_id: str,
        name: str,
        category: Optional[str],
        price: float,
        cost_price: float,
        stock: int,
        min_stock: int,
        unit: str,
    ) -> Product:
        product = Product(
            id=id,
            owner_id=owner_id,
            name=name,
            category=category,
            price=price,
            cost_price=cost_price,
            stock=stock,
            min_stock=min_stock,
            unit=unit,
        )

        self.session.add(product)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise e
        await self.session.refresh(product)
        return product

    async def get(self, owner_id: str, id: str) -> Optional[Product]:
        return await self.session.scalar(
            select(Product).where(Product.id == id, Product.owner_id == owner_id)
        )

    async def get_by_name(self, owner_id: str, name: str) -> Optional[Product]:
        return await self.session.scalar(
            select(Product).where(Product.owner_id == owner_id, Product.name == name)
        )

    async def get_all(
        self,
        owner_id: str,
        *,
        limit: Optional[int] = None,
        offset: int = 0,
        name_query: Optional[str] = None,
        category: Optional[str] = None,
    ) -> list[Product]:
        stmt = select(Product).where(Product.owner_id == owner_id)
        if name_query:
            stmt = stmt.where(func.lower(Product.name).like(f"%{name_query.lower()}%"))
        if category:
            stmt = stmt.where(Product.category == category)

        stmt = stmt.order_by(Product.name).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, owner_id: str) -> int:
        return await self.session.scalar(
            select(func.count()).select_from(Product).where(Product.owner_id == owner_id)
        ) or 0

    async def update_partial(self, owner_id: str, id: str, **fields) -> Product:
        product = await self.get(owner_id, id)
        if not product:
            raise ValueError(f"Product '{id}' not found")

        new_name = fields.get("name")
        if new_name is not None and new_name != product.name:
            if await self.get_by_name(owner_id, new_name):
                raise ValueError(f"Product named '{new_name}' already exists")

        for key, value in fields.items():
            if value is not None:
                setattr(product, key, value)

        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise e

        await self.session.refresh(product)
        return product

    async def delete(self, owner_id: str, id: str) -> Product:
        product = await self.get(owner_id, id)
        if not product:
            raise ValueError(f"Product '{id}' not found")

        await self.session.delete(product)
        await self.session.commit()
        return product
