from uuid import uuid4
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from sales_dashboard.models.activity_log import ActivityLog


class ActivityRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    # one entry per user-visible change
    async def add(self, owner_id: str, action: str, details: str) -> ActivityLog:
        entry = ActivityLog(id=str(uuid4()), owner_id=owner_id, action=action, details=details)
        self.session.add(entry)
        await self.session.commit()
        return entry

    async def latest(self, owner_id: str, limit: int = 100) -> list[ActivityLog]:
        result = await self.session.execute(
            select(ActivityLog)
            .where(ActivityLog.owner_id == owner_id)
            .order_by(ActivityLog.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
