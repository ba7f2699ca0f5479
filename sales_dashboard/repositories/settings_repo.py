from typing import Optional
from uuid import uuid4
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from sales_dashboard.models.business_settings import BusinessSettings


class SettingsRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, owner_id: str) -> Optional[BusinessSettings]:
        return await self.session.scalar(
            select(BusinessSettings).where(BusinessSettings.owner_id == owner_id)
        )

    # insert or update the single settings row of an owner
    async def upsert(self, owner_id: str, values: dict) -> BusinessSettings:
        row = await self.get(owner_id)
        if row is None:
            row = BusinessSettings(id=str(uuid4()), owner_id=owner_id, **values)
            self.session.add(row)
        else:
            for key, value in values.items():
                setattr(row, key, value)

        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise e
        await self.session.refresh(row)
        return row
